"""Translation provider abstractions."""

from __future__ import annotations

import json
import re
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Sequence

import requests

from .configuration import DEFAULT_ENDPOINT, DEFAULT_USER_AGENT
from .errors import (
    TranslationProviderConfigurationError,
    TranslationProviderError,
    TranslationResponseError,
    TranslationServiceError,
)

# Batches several chunks into one request; the control character survives
# translation and the newlines keep it out of the surrounding sentences.
PART_DELIMITER = "\n\u0002\n"
_PART_SPLIT_PATTERN = re.compile(r"\n?\u0002\n?")

UNKNOWN_LANGUAGE = "unknown"


@dataclass
class ProviderResponse:
    """Translated parts in submission order and the detected source language."""

    translations: List[str]
    detected_language: str


class TranslationProvider(ABC):
    """Abstract adapter for translation providers."""

    name = "abstract"

    @abstractmethod
    def translate(
        self,
        texts: Sequence[str],
        *,
        source_language: str,
        target_language: str,
    ) -> ProviderResponse:
        """Translate every text in one call and return the parts in order."""


class EchoTranslationProvider(TranslationProvider):
    """A provider that returns the original text (useful for testing)."""

    name = "echo"

    def translate(
        self,
        texts: Sequence[str],
        *,
        source_language: str,
        target_language: str,
    ) -> ProviderResponse:
        return ProviderResponse(translations=list(texts), detected_language=source_language)


class GoogleTranslateProvider(TranslationProvider):
    """Provider backed by the public Google Translate ``translate_a`` endpoint."""

    name = "google"

    def __init__(
        self,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        client_id: str = "gtx",
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float | None = None,
        session: requests.Session | None = None,
        debug: bool = False,
    ) -> None:
        self.endpoint = endpoint
        self.client_id = client_id
        self.user_agent = user_agent
        self.timeout = timeout
        self.session = session or requests.Session()
        self.debug = debug

    def translate(
        self,
        texts: Sequence[str],
        *,
        source_language: str,
        target_language: str,
    ) -> ProviderResponse:
        if not texts:
            return ProviderResponse(translations=[], detected_language=source_language)

        params = {
            "client": self.client_id,
            "sl": source_language,
            "tl": target_language,
            "dt": "t",
            "q": PART_DELIMITER.join(texts),
        }
        headers = {
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }
        self._log_debug("provider.request.params", params)

        try:
            response = self.session.get(
                self.endpoint, params=params, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise TranslationProviderError(
                f"Translation service unreachable: {exc}"
            ) from exc

        self._log_debug("provider.response.status", response.status_code)
        if not response.ok:
            raise TranslationServiceError(response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise TranslationResponseError(f"invalid JSON ({exc})") from exc
        self._log_debug("provider.response.raw", payload)

        translations = self._split_parts(self._joined_translation(payload), len(texts))
        return ProviderResponse(
            translations=translations,
            detected_language=self._detected_language(payload),
        )

    def _joined_translation(self, payload: Any) -> str:
        """Concatenate the translated sentence fragments of the response."""

        if not isinstance(payload, list) or not payload:
            raise TranslationResponseError("expected a non-empty JSON array")
        sections = payload[0]
        if not isinstance(sections, list):
            raise TranslationResponseError("first element is not an array of sections")

        fragments: List[str] = []
        for section in sections:
            if not isinstance(section, list):
                raise TranslationResponseError("translation section is not an array")
            if not section or section[0] is None:
                continue
            if not isinstance(section[0], str):
                raise TranslationResponseError("translated text is not a string")
            fragments.append(section[0])
        return "".join(fragments)

    def _split_parts(self, joined: str, expected: int) -> List[str]:
        parts = _PART_SPLIT_PATTERN.split(joined)
        if len(parts) != expected:
            raise TranslationResponseError(
                f"expected {expected} translated parts, received {len(parts)}"
            )
        return parts

    def _detected_language(self, payload: List[Any]) -> str:
        if len(payload) > 2 and payload[2] is not None:
            return str(payload[2])
        return UNKNOWN_LANGUAGE

    def _log_debug(self, label: str, payload: Any) -> None:
        """Emit structured debug information when enabled."""

        if not self.debug:
            return
        try:
            if isinstance(payload, (dict, list)):
                message = json.dumps(payload, ensure_ascii=False, indent=2)
            else:
                message = str(payload)
        except (TypeError, ValueError):
            message = repr(payload)
        print(f"[chatglot][provider-debug] {label}:\n{message}", file=sys.stderr)


def build_provider(
    name: str | None,
    *,
    settings: Any = None,
    debug: bool = False,
) -> TranslationProvider:
    """Factory to create providers by name."""

    normalized = (name or "google").strip().lower()
    if normalized in {"google", "gtx", "default"}:
        if settings is None:
            return GoogleTranslateProvider(debug=debug)
        return GoogleTranslateProvider(
            endpoint=settings.CHATGLOT_ENDPOINT,
            client_id=settings.CHATGLOT_CLIENT_ID,
            user_agent=settings.CHATGLOT_USER_AGENT,
            timeout=settings.CHATGLOT_REQUEST_TIMEOUT,
            debug=debug or bool(settings.CHATGLOT_PROVIDER_DEBUG),
        )
    if normalized in {"echo", "noop", "mock"}:
        return EchoTranslationProvider()
    raise TranslationProviderConfigurationError(
        f"Unknown translation provider '{name}'."
    )
