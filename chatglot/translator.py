"""High-level orchestration for translating one chat message."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .configuration import ChatglotConfig, get_settings
from .errors import (
    ErrorCode,
    ReconstructionError,
    TranslationProviderConfigurationError,
    TranslationProviderError,
)
from .providers import TranslationProvider, build_provider
from .segmenter import plan_message, reconstruct
from .structures import (
    TranslatableChunk,
    TranslationError,
    TranslationResult,
    TranslationSuccess,
)

AUTO_LANGUAGE = "auto"


class MessageTranslator:
    """Runs the detect, merge, split, translate and rebuild pipeline."""

    def __init__(
        self,
        *,
        provider: Optional[TranslationProvider] = None,
        settings: Optional[ChatglotConfig] = None,
        default_language: Optional[str] = None,
    ) -> None:
        self._provider = provider
        self._settings = settings
        self._default_language = default_language

    @property
    def settings(self) -> ChatglotConfig:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def provider(self) -> TranslationProvider:
        if self._provider is None:
            self._provider = build_provider(
                self.settings.CHATGLOT_PROVIDER, settings=self.settings
            )
        return self._provider

    @property
    def default_language(self) -> str:
        if self._default_language is None:
            self._default_language = self.settings.CHATGLOT_DEFAULT_LANGUAGE
        return self._default_language

    def translate(
        self,
        text: str,
        source_language: Optional[str] = None,
        target_language: Optional[str] = None,
    ) -> TranslationResult:
        source = source_language or AUTO_LANGUAGE
        try:
            target = target_language or self.default_language
        except TranslationProviderConfigurationError as exc:
            return TranslationError(code=ErrorCode.CONFIGURATION, message=str(exc))

        plan = plan_message(text)
        pending: List[TranslatableChunk] = [
            chunk for chunk in plan.chunks if chunk.text.strip()
        ]

        if not pending:
            return TranslationSuccess(
                source_language=source,
                target_language=target,
                source_text=text,
                translated_text=text,
            )

        # Only the visible core of each chunk is sent; edge whitespace is
        # restored locally so markup never fuses with neighbouring prose.
        edges = [_split_edges(chunk.text) for chunk in pending]

        try:
            response = self.provider.translate(
                [core for _, core, _ in edges],
                source_language=source,
                target_language=target,
            )
            if len(response.translations) != len(pending):
                raise ReconstructionError(
                    f"Expected {len(pending)} translated parts, "
                    f"received {len(response.translations)}."
                )
            translated = {
                chunk.original_offset: f"{lead}{part.strip()}{trail}"
                for chunk, (lead, _, trail), part in zip(
                    pending, edges, response.translations
                )
            }
            translations = [
                translated.get(chunk.original_offset, chunk.text)
                for chunk in plan.chunks
            ]
            translated_text = reconstruct(plan.chunks, translations, plan.segments)
        except TranslationProviderConfigurationError as exc:
            return TranslationError(code=ErrorCode.CONFIGURATION, message=str(exc))
        except TranslationProviderError as exc:
            return TranslationError(code=exc.code, message=str(exc))
        except ReconstructionError as exc:
            return TranslationError(code=ErrorCode.PARSE, message=f"parse failure: {exc}")

        return TranslationSuccess(
            source_language=response.detected_language,
            target_language=target,
            source_text=text,
            translated_text=translated_text,
        )


def _split_edges(text: str) -> Tuple[str, str, str]:
    """Split text into leading whitespace, visible core and trailing whitespace."""

    core = text.strip()
    start = len(text) - len(text.lstrip())
    return text[:start], core, text[start + len(core):]


def translate_message(
    text: str,
    source_language: Optional[str] = None,
    target_language: Optional[str] = None,
    *,
    provider: Optional[TranslationProvider] = None,
    settings: Optional[ChatglotConfig] = None,
) -> TranslationResult:
    """Translate the prose of ``text`` while keeping markup untouched.

    Failures are returned as :class:`TranslationError` instead of raised.
    """

    translator = MessageTranslator(provider=provider, settings=settings)
    return translator.translate(text, source_language, target_language)
