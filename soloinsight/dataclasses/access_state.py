#!/usr/bin/env python3
"""
access_state.py
-------------------

State of the passphrase gate in front of the optional AI feature.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

MAX_ATTEMPTS = 5


@dataclass
class AiAccessState:
    """
    Gate state.

    Fields:
    - unlocked: Correct passphrase was entered
    - attempts: Number of wrong guesses so far
    """
    unlocked: bool = False
    attempts: int  = 0

    @property
    def locked_out(self) -> bool:
        return self.attempts >= MAX_ATTEMPTS

    def to_dict(self) -> Dict[str, Any]:
        return {"unlocked": self.unlocked, "attempts": self.attempts}

    @classmethod
    def from_dict(cls, data: Any) -> "AiAccessState":
        if not isinstance(data, dict):
            return cls()
        try:
            attempts = int(data.get("attempts", 0))
        except (TypeError, ValueError):
            attempts = 0
        return cls(unlocked=bool(data.get("unlocked", False)), attempts=attempts)
