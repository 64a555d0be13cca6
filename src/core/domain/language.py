"""Language utilities for dexwindow.

PokeAPI publishes flavor texts and genera for many locales. This module
centralizes the locales the application knows how to select, so that the
settings layer, the resolver and the CLI share a single source of truth
without importing adapters.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Locale codes as they appear in PokeAPI `language.name` fields."""

    ENGLISH = "en"
    SPANISH = "es"
    FRENCH = "fr"
    GERMAN = "de"
    ITALIAN = "it"
    JAPANESE = "ja"

    @classmethod
    def default(cls) -> "Language":
        """Return the default language used across the application."""

        return cls.ENGLISH

    def label(self) -> str:
        """Human readable label for prompts and logging."""

        return {
            Language.ENGLISH: "English",
            Language.SPANISH: "Spanish",
            Language.FRENCH: "French",
            Language.GERMAN: "German",
            Language.ITALIAN: "Italian",
            Language.JAPANESE: "Japanese",
        }[self]
