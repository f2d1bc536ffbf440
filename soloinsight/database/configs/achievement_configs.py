#!/usr/bin/env python3
"""
achievement_configs.py
----------------------

Static achievement definitions.

Each achievement is a pure predicate over the full entry list. The
evaluator re-runs the predicates of locked achievements whenever the list
changes; predicates must not have side effects.
"""
from dataclasses import dataclass
from typing import Callable, List, Sequence

from soloinsight.dataclasses.entry import Entry


@dataclass(frozen=True)
class AchievementConfig:
    """
    Definition of one achievement.

    Attributes:
        id: Stable identifier stored in the unlock map
        title: Display title
        description: What it takes to unlock
        icon: Icon name for front-ends
        condition: Predicate over all entries
    """
    id: str
    title: str
    description: str
    icon: str
    condition: Callable[[Sequence[Entry]], bool]


def _distinct_tags(entries: Sequence[Entry]) -> int:
    return len({tag for entry in entries for tag in entry.tags})


ACHIEVEMENT_CONFIGS: List[AchievementConfig] = [
    AchievementConfig(
        id="first_log",
        title="First Step",
        description="Log your first session",
        icon="flag",
        condition=lambda entries: len(entries) >= 1,
    ),
    AchievementConfig(
        id="week_streak",
        title="Consistency",
        description="Log 7 sessions in total",
        icon="flame",
        condition=lambda entries: len(entries) >= 7,
    ),
    AchievementConfig(
        id="explorer",
        title="Explorer",
        description="Use 5 different tags",
        icon="compass",
        condition=lambda entries: _distinct_tags(entries) >= 5,
    ),
    AchievementConfig(
        id="marathon",
        title="Marathon",
        description="Log a session longer than 30 minutes",
        icon="timer",
        condition=lambda entries: any(entry.duration > 30 for entry in entries),
    ),
]
