#!/usr/bin/env python3
"""
entry.py
-------------------

Defines the Entry record: one logged activity session.

Entries are persisted as camelCase JSON objects inside the 'entries' slot
(local) or the 'entries' field of the user document (remote). Parsing also
accepts the legacy keys 'orgasm' and 'contentUsed' written by earlier app
revisions.
"""
from __future__ import annotations

# --- Standard Library ---
import math
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# --- Local ---
from soloinsight.core.exceptions import EntryValidationError
from soloinsight.core.validators import DataValidator
from soloinsight.database.models.enums import Outcome
from soloinsight.utils.dates import now_ms


@dataclass(frozen=True)
class LinkedContent:
    """
    Snapshot of the content used during a session.

    Not a foreign key: editing the library item later does not touch it.
    """
    url:   Optional[str] = None
    actor: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not (self.url or self.actor)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.url is not None:
            data["url"] = self.url
        if self.actor is not None:
            data["actor"] = self.actor
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Optional["LinkedContent"]:
        if not isinstance(data, dict):
            return None
        return cls(url=data.get("url"), actor=data.get("actor"))


ENTRY_KEYS = (
    "id", "timestamp", "duration", "intensity", "outcome", "tags", "note", "linkedContent",
)

# Current key -> name used by earlier app revisions
LEGACY_KEYS: Dict[str, str] = {"outcome": "orgasm", "linkedContent": "contentUsed"}


def _parse_outcome(value: Any) -> Outcome:
    try:
        return Outcome(value)
    except ValueError:
        raise EntryValidationError(
            f"Invalid outcome: {value!r} (expected one of {', '.join(Outcome.choices())})"
        )


@dataclass
class EntryDraft:
    """
    User input for a new entry, before an id is assigned.

    Fields:
    - timestamp:      Epoch ms of the session (defaults to now)
    - duration:       Minutes, >= 1
    - intensity:      1-5
    - outcome:        Outcome (or its string value)
    - tags:           Tag names
    - note:           Free text, <= 500 characters
    - linked_content: Optional url/actor snapshot
    """
    duration:       int
    intensity:      int
    outcome:        Any                     = Outcome.YES
    tags:           List[str]               = field(default_factory=list)
    note:           str                     = ""
    timestamp:      Optional[int]           = None
    linked_content: Optional[LinkedContent] = None

    @staticmethod
    def duration_from_seconds(seconds: float) -> int:
        """
        Convert a stopwatch reading to whole minutes, never below 1.

        Examples:
            >>> EntryDraft.duration_from_seconds(61)
            2
            >>> EntryDraft.duration_from_seconds(0)
            1
        """
        return math.ceil(max(seconds, 0) / 60) or 1

    def validated(self) -> "EntryDraft":
        """
        Return a normalized copy of this draft.

        Raises:
            EntryValidationError: If any field breaks an entry invariant
        """
        linked = self.linked_content
        if linked is not None and linked.is_empty:
            linked = None
        return EntryDraft(
            duration=DataValidator.validate_duration(self.duration),
            intensity=DataValidator.validate_intensity(self.intensity),
            outcome=_parse_outcome(self.outcome),
            tags=DataValidator.normalize_tags(self.tags),
            note=DataValidator.validate_note(self.note),
            timestamp=now_ms() if self.timestamp is None else int(self.timestamp),
            linked_content=linked,
        )

    def build(self, entry_id: Optional[str] = None) -> "Entry":
        """Validate the draft and produce an Entry with a fresh id."""
        draft = self.validated()
        return Entry(
            id=entry_id or uuid.uuid4().hex,
            timestamp=draft.timestamp,  # type: ignore[arg-type]
            duration=draft.duration,
            intensity=draft.intensity,
            outcome=draft.outcome,
            tags=draft.tags,
            note=draft.note,
            linked_content=draft.linked_content,
        )


@dataclass
class Entry:
    """
    One logged activity session.

    The id is unique within the owner's collection and never changes.
    Keys this app does not know (photoData from the mobile app, ...) ride
    along in `extras`, and records read under legacy key names are written
    back under those names.
    """
    id:             str
    timestamp:      int
    duration:       int
    intensity:      int
    outcome:        Outcome
    tags:           List[str]               = field(default_factory=list)
    note:           str                     = ""
    linked_content: Optional[LinkedContent] = None
    extras:         Dict[str, Any]          = field(default_factory=dict, compare=False, repr=False)
    legacy_keys:    Tuple[str, ...]         = field(default=(), compare=False, repr=False)

    # ---- Serialization ----
    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "timestamp": self.timestamp,
            "duration": self.duration,
            "intensity": self.intensity,
            "outcome": self.outcome.value,
            "tags": list(self.tags),
            "note": self.note,
        }
        if self.linked_content is not None:
            data["linkedContent"] = self.linked_content.to_dict()
        for key in self.legacy_keys:
            if key in data:
                data[LEGACY_KEYS[key]] = data.pop(key)
        data.update(self.extras)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entry":
        """
        Parse a stored entry.

        Stored data is trusted as-is apart from type coercion; invariants are
        enforced when drafts are built, not when history is read back.

        Raises:
            EntryValidationError: If required keys are missing or malformed
        """
        if not isinstance(data, dict) or not data.get("id"):
            raise EntryValidationError(f"Malformed entry record: {data!r}")

        legacy = tuple(
            key for key, old in LEGACY_KEYS.items() if key not in data and old in data
        )
        consumed = set(ENTRY_KEYS) | {LEGACY_KEYS[key] for key in legacy}

        outcome = data.get("outcome", data.get("orgasm", Outcome.NO.value))
        linked = data.get("linkedContent", data.get("contentUsed"))
        try:
            return cls(
                id=str(data["id"]),
                timestamp=int(data["timestamp"]),
                duration=int(data.get("duration", 1)),
                intensity=int(data.get("intensity", 1)),
                outcome=_parse_outcome(outcome),
                tags=[str(t) for t in data.get("tags") or []],
                note=str(data.get("note") or ""),
                linked_content=LinkedContent.from_dict(linked),
                extras={k: v for k, v in data.items() if k not in consumed},
                legacy_keys=legacy,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise EntryValidationError(f"Malformed entry record {data.get('id')}: {e}")
