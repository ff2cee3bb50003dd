from typing import List, Sequence
from unittest.mock import MagicMock

import pytest

from chatglot.providers import ProviderResponse, TranslationProvider


class UppercaseProvider(TranslationProvider):
    """Fake provider that upper-cases every part and records its calls."""

    name = "uppercase"

    def __init__(self, detected_language: str = "en", raises: Exception | None = None):
        self.detected_language = detected_language
        self.raises = raises
        self.calls: List[dict] = []

    def translate(self, texts: Sequence[str], *, source_language: str, target_language: str):
        self.calls.append({
            "texts": list(texts),
            "source_language": source_language,
            "target_language": target_language,
        })
        if self.raises:
            raise self.raises
        return ProviderResponse(
            translations=[text.upper() for text in texts],
            detected_language=self.detected_language,
        )


def make_response(status_code: int = 200, payload=None, json_error: Exception | None = None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def make_session(response=None, raises: Exception | None = None):
    session = MagicMock()
    if raises is not None:
        session.get.side_effect = raises
    else:
        session.get.return_value = response
    return session


@pytest.fixture
def uppercase_provider():
    return UppercaseProvider()
