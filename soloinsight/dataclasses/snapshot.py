#!/usr/bin/env python3
"""
snapshot.py
-------------------

In-memory state of one user session.

A Snapshot is the canonical copy the managers read and mutate; backends
only ever see its serialized fields. Converting to and from the document
shape (the remote user document and the backup file share it) lives here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from soloinsight.core.exceptions import ValidationError
from soloinsight.core.logging_manager import InsightLogger, safe_logger
from soloinsight.database.configs.storage_configs import (
    ACHIEVEMENTS,
    AI_ACCESS,
    DEFAULT_LANGUAGE,
    DEFAULT_TAGS,
    ENTRIES,
    LANGUAGE,
    LIBRARY,
    TAGS,
)
from soloinsight.database.models.enums import Language

from .access_state import AiAccessState
from .content_item import ContentItem
from .entry import Entry


def parse_entries(raw: Any, logger: Optional[InsightLogger] = None) -> List[Entry]:
    """
    Parse stored entry dicts, skipping (and logging) malformed records.
    """
    entries: List[Entry] = []
    for item in raw if isinstance(raw, list) else []:
        try:
            entries.append(Entry.from_dict(item))
        except ValidationError as e:
            safe_logger(logger).log_warning("Skipping malformed entry", {"error": str(e)})
    return entries


def parse_library(raw: Any, logger: Optional[InsightLogger] = None) -> List[ContentItem]:
    """
    Parse stored library dicts, skipping (and logging) malformed records.
    """
    items: List[ContentItem] = []
    for item in raw if isinstance(raw, list) else []:
        try:
            items.append(ContentItem.from_dict(item))
        except (ValidationError, TypeError, ValueError) as e:
            safe_logger(logger).log_warning("Skipping malformed library item", {"error": str(e)})
    return items


def parse_achievements(raw: Any) -> Dict[str, int]:
    if not isinstance(raw, dict):
        return {}
    unlocked: Dict[str, int] = {}
    for key, value in raw.items():
        try:
            unlocked[str(key)] = int(value)
        except (TypeError, ValueError):
            continue
    return unlocked


def parse_tags(raw: Any) -> List[str]:
    if not isinstance(raw, list):
        return list(DEFAULT_TAGS)
    return [str(tag) for tag in raw]


def parse_language(raw: Any) -> str:
    return raw if raw in Language.choices() else DEFAULT_LANGUAGE


@dataclass
class Snapshot:
    """
    All user data for the active session.

    Fields:
    - entries:      Logged sessions, insertion order
    - tags:         Known tag names
    - library:      Library items, newest first
    - achievements: Achievement id -> unlock epoch ms
    - ai_access:    Passphrase gate state
    - language:     'en' or 'zh'
    """
    entries:      List[Entry]       = field(default_factory=list)
    tags:         List[str]         = field(default_factory=lambda: list(DEFAULT_TAGS))
    library:      List[ContentItem] = field(default_factory=list)
    achievements: Dict[str, int]    = field(default_factory=dict)
    ai_access:    AiAccessState     = field(default_factory=AiAccessState)
    language:     str               = DEFAULT_LANGUAGE

    # ---- Field-level serialization ----
    def serialize(self, slot: str) -> Any:
        """Serialized value of a single slot."""
        if slot == ENTRIES:
            return [entry.to_dict() for entry in self.entries]
        if slot == TAGS:
            return list(self.tags)
        if slot == LIBRARY:
            return [item.to_dict() for item in self.library]
        if slot == ACHIEVEMENTS:
            return dict(self.achievements)
        if slot == AI_ACCESS:
            return self.ai_access.to_dict()
        if slot == LANGUAGE:
            return self.language
        raise KeyError(slot)

    def to_document(self) -> Dict[str, Any]:
        """Serialize every slot to the user-document shape."""
        return {
            slot: self.serialize(slot)
            for slot in (ENTRIES, TAGS, LIBRARY, ACHIEVEMENTS, AI_ACCESS, LANGUAGE)
        }

    @classmethod
    def from_document(
        cls, data: Dict[str, Any], logger: Optional[InsightLogger] = None
    ) -> "Snapshot":
        """
        Build a snapshot from a user document or a slot dict.

        Missing or malformed fields fall back to their defaults.
        """
        return cls(
            entries=parse_entries(data.get(ENTRIES), logger),
            tags=parse_tags(data.get(TAGS)),
            library=parse_library(data.get(LIBRARY), logger),
            achievements=parse_achievements(data.get(ACHIEVEMENTS)),
            ai_access=AiAccessState.from_dict(data.get(AI_ACCESS)),
            language=parse_language(data.get(LANGUAGE)),
        )

    def replace_with(self, other: "Snapshot") -> None:
        """Overwrite every field in place, keeping object identity."""
        self.entries = other.entries
        self.tags = other.tags
        self.library = other.library
        self.achievements = other.achievements
        self.ai_access = other.ai_access
        self.language = other.language
