"""Translate chat messages while preserving mentions, emoji and formatting."""

from .structures import (
    Span,
    TranslatableChunk,
    TranslationError,
    TranslationResult,
    TranslationSuccess,
)
from .translator import MessageTranslator, translate_message

__all__ = [
    "MessageTranslator",
    "Span",
    "TranslatableChunk",
    "TranslationError",
    "TranslationResult",
    "TranslationSuccess",
    "translate_message",
]
