"""Language utilities for brandscout.

This module centralizes the language options supported for generation
prompts. Keeping it in the domain layer allows both CLI and adapter
layers to share a single source of truth without creating circular
imports.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for prompts."""

    ENGLISH = "en"
    SPANISH = "es"

    @classmethod
    def default(cls) -> "Language":
        """Return the default language used across the application."""

        return cls.ENGLISH

    def label(self) -> str:
        """Human readable label for prompts and logging."""

        return "Spanish" if self is Language.SPANISH else "English"
