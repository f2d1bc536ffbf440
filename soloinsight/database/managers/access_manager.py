#!/usr/bin/env python3
"""
access_manager.py
-----------------
Passphrase gate in front of the optional AI insights feature.

The passphrase is a fixed shared constant, a deterrent rather than a
security boundary. Five wrong guesses lock the gate for good; a locked
gate rejects further attempts without counting them.
"""
from typing import Optional

from soloinsight.core.exceptions import AccessLockedError
from soloinsight.core.logging_manager import safe_logger
from soloinsight.dataclasses.access_state import MAX_ATTEMPTS, AiAccessState
from soloinsight.database.configs.storage_configs import AI_ACCESS
from .base_manager import BaseManager

PASSPHRASE = "114514"


class AccessManager(BaseManager):
    """AI access gate operations."""

    def state(self) -> AiAccessState:
        return self.snapshot.ai_access

    def is_unlocked(self) -> bool:
        return self.snapshot.ai_access.unlocked

    def is_locked(self) -> bool:
        state = self.snapshot.ai_access
        return not state.unlocked and state.locked_out

    def remaining_attempts(self) -> int:
        return max(MAX_ATTEMPTS - self.snapshot.ai_access.attempts, 0)

    def attempt(self, passphrase: Optional[str]) -> bool:
        """
        Try to unlock the gate.

        Returns:
            True if the gate is (now) unlocked, False for a wrong guess

        Raises:
            AccessLockedError: If the gate is permanently locked
        """
        if self.is_locked():
            raise AccessLockedError(
                f"AI access locked after {MAX_ATTEMPTS} failed attempts"
            )

        state = self.snapshot.ai_access
        if state.unlocked:
            return True

        if (passphrase or "").strip() == PASSPHRASE:
            self.snapshot.ai_access = AiAccessState(unlocked=True, attempts=state.attempts)
            self._persist(AI_ACCESS)
            safe_logger(self.logger).log_info("AI access unlocked")
            return True

        self.snapshot.ai_access = AiAccessState(unlocked=False, attempts=state.attempts + 1)
        self._persist(AI_ACCESS)
        safe_logger(self.logger).log_warning(
            "Wrong AI access passphrase", {"attempts": self.snapshot.ai_access.attempts}
        )
        return False

    def replace(self, state: AiAccessState, persist: bool = True) -> None:
        self.snapshot.ai_access = state
        if persist:
            self._persist(AI_ACCESS)
