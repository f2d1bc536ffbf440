"""
Base Classes
------------

Declarative base for the Solo Insight storage tables.

Both the local slot store and the SQL-backed remote document store keep
JSON text in a single column; the schema is deliberately flat.
"""
# --- Annotations ---
from __future__ import annotations

# --- Third party ---
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Provides the metadata object used for table creation.
    """

    pass
