"""
Enumeration Types
------------------

Enum classes for Solo Insight records.

Enums:
    - Outcome: How a logged session ended (yes, no, edging)
    - Language: Supported interface languages

These enums keep the persisted string values stable while giving code
type-safe names.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from enum import Enum
from typing import List


class Outcome(str, Enum):
    """
    Enumeration of session outcomes.
    - YES: Completed
    - NO: Not completed
    - EDGING: Deliberately held back
    """

    YES = "YES"
    NO = "NO"
    EDGING = "EDGING"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available outcome choices."""
        return [outcome.value for outcome in cls]

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        return self.value.title()


class Language(str, Enum):
    """Supported interface languages."""

    EN = "en"
    ZH = "zh"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all available language codes."""
        return [lang.value for lang in cls]
