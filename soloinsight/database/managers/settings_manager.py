#!/usr/bin/env python3
"""
settings_manager.py
-------------------
Manages the interface language preference.
"""
from soloinsight.core.validators import DataValidator
from soloinsight.database.configs.storage_configs import LANGUAGE
from soloinsight.database.models.enums import Language
from .base_manager import BaseManager


class SettingsManager(BaseManager):
    """Language preference ('en' or 'zh')."""

    def language(self) -> str:
        return self.snapshot.language

    def set_language(self, language: str) -> str:
        """
        Store the language preference.

        Raises:
            ValidationError: If the language is not supported
        """
        DataValidator.validate_choice(language, Language.choices(), "language")
        if language != self.snapshot.language:
            self.snapshot.language = language
            self._persist(LANGUAGE)
        return language

    def replace(self, language: str, persist: bool = True) -> None:
        self.snapshot.language = language
        if persist:
            self._persist(LANGUAGE)
