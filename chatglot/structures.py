"""Core data structures for the Chatglot translator."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Span:
    """A protected region of the original text, end index exclusive."""

    start_index: int
    end_index: int
    source_text: str

    def __post_init__(self) -> None:
        if not 0 <= self.start_index < self.end_index:
            raise ValueError(
                f"Invalid span bounds [{self.start_index}, {self.end_index})."
            )


@dataclass(frozen=True)
class TranslatableChunk:
    """Prose lying between protected segments."""

    text: str
    original_offset: int


@dataclass
class TranslationSuccess:
    """A translated message plus what is needed to restore the original."""

    source_language: str
    target_language: str
    source_text: str
    translated_text: str
    showing_original: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": True, **asdict(self)}


@dataclass(frozen=True)
class TranslationError:
    """A failed translation, reported as data rather than raised."""

    code: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": False, **asdict(self)}

    def __str__(self) -> str:
        return f"{self.message} ({self.code})"


TranslationResult = Union[TranslationSuccess, TranslationError]
