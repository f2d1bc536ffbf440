"""
models package
--------------
ORM models and enums for Solo Insight storage.
"""
from .base import Base
from .enums import Language, Outcome
from .storage import StorageSlot, UserDocument

__all__ = [
    "Base",
    "Language",
    "Outcome",
    "StorageSlot",
    "UserDocument",
]
