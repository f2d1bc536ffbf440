#!/usr/bin/env python3
"""
storage_configs.py
------------------

Configuration-driven description of the persisted slots.

Each logical slot (entries, tags, ...) has one local key and one default.
The same slot name is used as the field name in the remote user document,
so both backends share this table.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

DEFAULT_TAGS: List[str] = [
    "Relaxation",
    "Stress Relief",
    "Imagination",
    "Toy",
    "Visual Content",
    "Audio",
    "Tired",
    "Energetic",
]

DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class SlotConfig:
    """
    Configuration for one persisted slot.

    Attributes:
        slot: Logical name, also the remote document field
        local_key: Key used by the local key-value store
        default: Factory returning a fresh default value
    """
    slot: str
    local_key: str
    default: Callable[[], Any]


ENTRIES = "entries"
TAGS = "tags"
ACHIEVEMENTS = "achievements"
LIBRARY = "library"
AI_ACCESS = "aiAccess"
LANGUAGE = "language"

# Device-local slots, never part of the user document
INSIGHTS = "insights"
MIGRATED_USERS = "migratedUsers"
BACKUP_PLATFORM = "backupPlatform"

SLOT_CONFIGS: List[SlotConfig] = [
    SlotConfig(ENTRIES, "solo_insight_entries", list),
    SlotConfig(TAGS, "solo_insight_tags", lambda: list(DEFAULT_TAGS)),
    SlotConfig(ACHIEVEMENTS, "solo_insight_achievements_state", dict),
    SlotConfig(LIBRARY, "solo_insight_library", list),
    SlotConfig(AI_ACCESS, "solo_insight_ai_access", lambda: {"unlocked": False, "attempts": 0}),
    SlotConfig(LANGUAGE, "solo_insight_language", lambda: DEFAULT_LANGUAGE),
]

# Saved AI insights are kept opaque: imported from backups, exported back
# unchanged, never interpreted.
LOCAL_SLOT_CONFIGS: List[SlotConfig] = [
    SlotConfig(INSIGHTS, "solo_insight_saved_insights", lambda: None),
    SlotConfig(MIGRATED_USERS, "solo_insight_migrated_users", list),
    SlotConfig(BACKUP_PLATFORM, "solo_insight_backup_platform", lambda: None),
]

SLOTS: Dict[str, SlotConfig] = {
    config.slot: config for config in (*SLOT_CONFIGS, *LOCAL_SLOT_CONFIGS)
}


def default_for(slot: str) -> Any:
    """Fresh default value for a slot."""
    return SLOTS[slot].default()
