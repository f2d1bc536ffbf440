#!/usr/bin/env python3
"""
achievement_manager.py
----------------------
Achievement evaluator.

Checks the predicates of still-locked achievements against the full entry
list and records the unlock time of each one that now holds. Unlocks are
monotonic: deleting entries never re-locks anything; only a full wipe
clears the map.

Usage:
    ach_mgr = AchievementManager(context, logger)
    ach_mgr.on_unlock(lambda achievement_id: print("Unlocked", achievement_id))
    ach_mgr.evaluate(entries)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Callable, Dict, List, Optional, Sequence, Tuple

# --- Local imports ---
from soloinsight.core.logging_manager import safe_logger
from soloinsight.dataclasses.entry import Entry
from soloinsight.database.configs.achievement_configs import (
    ACHIEVEMENT_CONFIGS,
    AchievementConfig,
)
from soloinsight.database.configs.storage_configs import ACHIEVEMENTS
from soloinsight.database.decorators import log_database_operation
from soloinsight.utils.dates import TimeLike, to_ms
from .base_manager import BaseManager

UnlockCallback = Callable[[str], None]


class AchievementManager(BaseManager):
    """Evaluates and records achievement unlocks."""

    def __init__(self, context, logger=None):
        super().__init__(context, logger)
        self._callbacks: List[UnlockCallback] = []

    def on_unlock(self, callback: UnlockCallback) -> None:
        """Register a callback run once per newly unlocked achievement."""
        self._callbacks.append(callback)

    def unlocked(self) -> Dict[str, int]:
        return dict(self.snapshot.achievements)

    def status(self) -> List[Tuple[AchievementConfig, Optional[int]]]:
        """Every definition with its unlock time, or None while locked."""
        return [
            (config, self.snapshot.achievements.get(config.id))
            for config in ACHIEVEMENT_CONFIGS
        ]

    @log_database_operation("evaluate_achievements")
    def evaluate(self, entries: Sequence[Entry], now: TimeLike = None) -> List[str]:
        """
        Unlock every locked achievement whose condition now holds.

        Args:
            entries: Full entry list
            now: Unlock time (default: now)

        Returns:
            Ids unlocked by this call
        """
        unlocked_at = to_ms(now)
        newly: List[str] = [
            config.id
            for config in ACHIEVEMENT_CONFIGS
            if config.id not in self.snapshot.achievements and config.condition(entries)
        ]
        if not newly:
            return []

        achievements = dict(self.snapshot.achievements)
        for achievement_id in newly:
            achievements[achievement_id] = unlocked_at
        self.snapshot.achievements = achievements
        self._persist(ACHIEVEMENTS)

        safe_logger(self.logger).log_info("Achievements unlocked", {"ids": newly})
        for achievement_id in newly:
            for callback in self._callbacks:
                callback(achievement_id)
        return newly

    def replace_all(self, achievements: Dict[str, int], persist: bool = True) -> None:
        self.snapshot.achievements = dict(achievements)
        if persist:
            self._persist(ACHIEVEMENTS)
