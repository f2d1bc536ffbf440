"""
Storage Models
--------------

Tables backing the two persistence backends.

Models:
    - StorageSlot: One named key-value slot on the local device
    - UserDocument: One JSON document per authenticated user (remote)

Values are stored as JSON text and replaced wholesale on every write.
"""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StorageSlot(Base):
    """
    Local key-value slot.

    Attributes:
        key: Slot name ('solo_insight_entries', 'solo_insight_tags', ...)
        value: JSON-encoded slot value
        updated_at: Last write time

    Examples:
        StorageSlot(key="solo_insight_language", value='"en"')
    """

    __tablename__ = "storage_slots"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<StorageSlot {self.key} updated={self.updated_at}>"


class UserDocument(Base):
    """
    Remote per-user document.

    The document body holds entries, tags, library, achievements,
    aiAccess, language and createdAt. Each field is overwritten whole;
    there is no version column, so concurrent writers race (last write
    wins).

    Attributes:
        uid: Authenticated user identifier
        data: JSON-encoded document body
        created_at: Creation time of the row
        updated_at: Last write time
    """

    __tablename__ = "user_documents"

    uid: Mapped[str] = mapped_column(String(128), primary_key=True)
    data: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<UserDocument {self.uid} updated={self.updated_at}>"
