#!/usr/bin/env python3
"""
managers package
--------------------
Slot managers for Solo Insight.

Each manager owns one slot of the session snapshot and persists it
through the active backend.

Available Managers:
    BaseManager: Abstract base with persistence and notice handling
    EntryManager: The Entry Store (sole writer of entries)
    TagManager: Tag list
    LibraryManager: Personal content library
    AchievementManager: Achievement evaluator
    AccessManager: AI feature passphrase gate
    SettingsManager: Language preference

Usage:
    from soloinsight.database.managers import EntryManager, StoreContext

    context = StoreContext(backend=LocalBackend(db_path))
    entry_mgr = EntryManager(context, logger)
"""
from .base_manager import BaseManager, Notice, StoreContext
from .entry_manager import EntryManager
from .tag_manager import TagManager
from .library_manager import LibraryManager
from .achievement_manager import AchievementManager
from .access_manager import AccessManager, PASSPHRASE
from .settings_manager import SettingsManager

__all__ = [
    "BaseManager",
    "Notice",
    "StoreContext",
    "EntryManager",
    "TagManager",
    "LibraryManager",
    "AchievementManager",
    "AccessManager",
    "SettingsManager",
    "PASSPHRASE",
]
