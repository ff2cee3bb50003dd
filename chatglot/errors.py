"""Error definitions for the Chatglot message translator."""

from __future__ import annotations

from typing import Optional


class ErrorCode:
    """Numeric codes carried by error results that have no HTTP status."""

    TRANSPORT = -1
    PARSE = -2
    CONFIGURATION = -3
    RATE_LIMITED = 429


RATE_LIMIT_MESSAGE = "Translate API ratelimit reached. Please try again later."


class ChatglotError(Exception):
    """Base exception for all custom errors."""


class TranslationProviderConfigurationError(ChatglotError):
    """Raised when the translation provider is misconfigured."""


class TranslationProviderError(ChatglotError):
    """Raised when the translation provider fails permanently."""

    code: int = ErrorCode.TRANSPORT


class TranslationServiceError(TranslationProviderError):
    """Raised when the remote service answers with a non-success status."""

    def __init__(self, status_code: int, message: Optional[str] = None) -> None:
        self.code = status_code
        if message is None:
            if status_code == ErrorCode.RATE_LIMITED:
                message = RATE_LIMIT_MESSAGE
            else:
                message = (
                    f"An unknown error occurred (HTTP {status_code}). "
                    "Please report this to the developer of Chatglot."
                )
        super().__init__(message)


class TranslationResponseError(TranslationProviderError):
    """Raised when the response body cannot be decoded into translated parts."""

    code = ErrorCode.PARSE

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"parse failure: {detail}")


class ReconstructionError(ChatglotError):
    """Raised when translated parts cannot be paired with their chunks."""
