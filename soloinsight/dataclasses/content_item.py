#!/usr/bin/env python3
"""
content_item.py
-------------------

Defines ContentItem, one saved reference in the personal library.

Library items are independent of entries: an entry only keeps a snapshot
of url/actor in its linkedContent.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from soloinsight.core.exceptions import ValidationError
from soloinsight.utils.dates import now_ms


@dataclass
class ContentItem:
    """
    A personal library item.

    Fields:
    - id:           Opaque unique id
    - url:          Optional link
    - actor:        Optional performer/creator name
    - title:        Optional nickname for the link
    - is_favorite:  Starred flag
    - created_at:   Epoch ms of creation
    - last_used_at: Epoch ms of last use (optional)
    """
    id:           str
    url:          Optional[str] = None
    actor:        Optional[str] = None
    title:        Optional[str] = None
    is_favorite:  bool          = False
    created_at:   int           = 0
    last_used_at: Optional[int] = None

    @classmethod
    def new(
        cls,
        url: Optional[str] = None,
        actor: Optional[str] = None,
        title: Optional[str] = None,
    ) -> "ContentItem":
        """Create an unfavorited item with a fresh id and creation time."""
        return cls(
            id=uuid.uuid4().hex,
            url=url,
            actor=actor,
            title=title,
            is_favorite=False,
            created_at=now_ms(),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.url or self.actor or self.title)

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on title, actor or url."""
        needle = (term or "").lower()
        return any(
            needle in (value or "").lower()
            for value in (self.title, self.actor, self.url)
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id}
        for key, value in (("url", self.url), ("actor", self.actor), ("title", self.title)):
            if value is not None:
                data[key] = value
        data["isFavorite"] = self.is_favorite
        data["createdAt"] = self.created_at
        if self.last_used_at is not None:
            data["lastUsedAt"] = self.last_used_at
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContentItem":
        if not isinstance(data, dict) or not data.get("id"):
            raise ValidationError(f"Malformed library item: {data!r}")
        last_used = data.get("lastUsedAt")
        return cls(
            id=str(data["id"]),
            url=data.get("url"),
            actor=data.get("actor"),
            title=data.get("title"),
            is_favorite=bool(data.get("isFavorite", False)),
            created_at=int(data.get("createdAt") or 0),
            last_used_at=int(last_used) if last_used is not None else None,
        )
