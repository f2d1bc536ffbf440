#!/usr/bin/env python3
"""
validators.py
--------------------
Data validation and normalization utilities.

Used by the entry, tag and library managers to check user input before
it reaches the in-memory snapshot.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Optional

from .exceptions import EntryValidationError, ValidationError

MIN_DURATION = 1
MIN_INTENSITY = 1
MAX_INTENSITY = 5
MAX_NOTE_LENGTH = 500


class DataValidator:
    """Centralized data validation for manager operations."""

    @staticmethod
    def normalize_string(value: Any) -> Optional[str]:
        """
        Strip a string value; empty or None becomes None.

        Examples:
            >>> DataValidator.normalize_string("  Toy ")
            'Toy'
            >>> DataValidator.normalize_string("   ") is None
            True
        """
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @staticmethod
    def normalize_int(value: Any) -> Optional[int]:
        """
        Convert value to int safely.

        Returns:
            Integer value, or None if conversion is impossible
        """
        if value is None or isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def normalize_tags(tags: Iterable[Any]) -> List[str]:
        """
        Strip tag names and drop blanks and duplicates, keeping first-seen order.
        """
        seen = set()
        out: List[str] = []
        for tag in tags or []:
            name = DataValidator.normalize_string(tag)
            if name and name not in seen:
                seen.add(name)
                out.append(name)
        return out

    @staticmethod
    def validate_duration(value: Any) -> int:
        """
        Validate an entry duration in minutes.

        Raises:
            EntryValidationError: If not an integer >= 1
        """
        duration = DataValidator.normalize_int(value)
        if duration is None or duration < MIN_DURATION:
            raise EntryValidationError(
                f"Duration must be at least {MIN_DURATION} minute, got {value!r}"
            )
        return duration

    @staticmethod
    def validate_intensity(value: Any) -> int:
        """
        Validate an entry intensity.

        Raises:
            EntryValidationError: If not an integer in [1, 5]
        """
        intensity = DataValidator.normalize_int(value)
        if intensity is None or not MIN_INTENSITY <= intensity <= MAX_INTENSITY:
            raise EntryValidationError(
                f"Intensity must be between {MIN_INTENSITY} and "
                f"{MAX_INTENSITY}, got {value!r}"
            )
        return intensity

    @staticmethod
    def validate_note(value: Any) -> str:
        """
        Validate an entry note.

        Raises:
            EntryValidationError: If longer than 500 characters
        """
        note = "" if value is None else str(value)
        if len(note) > MAX_NOTE_LENGTH:
            raise EntryValidationError(
                f"Note exceeds {MAX_NOTE_LENGTH} characters ({len(note)})"
            )
        return note

    @staticmethod
    def validate_choice(value: Any, choices: Iterable[str], field: str) -> str:
        """
        Validate that a value is one of the allowed choices.

        Raises:
            ValidationError: If the value is not allowed
        """
        allowed = list(choices)
        if value not in allowed:
            raise ValidationError(
                f"Invalid {field}: {value!r} (expected one of {', '.join(allowed)})"
            )
        return value
