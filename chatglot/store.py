"""Caller-owned cache of translated messages and their display toggle."""

from __future__ import annotations

import threading
from typing import Dict, Hashable, Optional

from .structures import TranslationResult, TranslationSuccess


def annotate(result: TranslationSuccess) -> str:
    """Render a translation with its language pair, as shown in chat."""

    return (
        f"{result.translated_text} "
        f"(translated: {result.source_language} -> {result.target_language})"
    )


class TranslationStore:
    """Maps message ids to successful translations.

    The pipeline never reads or writes this store; hosts call it from
    whichever thread finishes a translation.
    """

    def __init__(self) -> None:
        self._entries: Dict[Hashable, TranslationSuccess] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, message_id: Hashable) -> bool:
        with self._lock:
            return message_id in self._entries

    def get(self, message_id: Hashable) -> Optional[TranslationSuccess]:
        with self._lock:
            return self._entries.get(message_id)

    def put(self, message_id: Hashable, result: TranslationResult) -> bool:
        """Cache a result and show it; errors are not cached."""

        if not isinstance(result, TranslationSuccess):
            return False
        result.showing_original = False
        with self._lock:
            self._entries[message_id] = result
        return True

    def remove(self, message_id: Hashable) -> None:
        with self._lock:
            self._entries.pop(message_id, None)

    def toggle(self, message_id: Hashable) -> Optional[bool]:
        """Flip between original and translated text; None if not cached."""

        with self._lock:
            entry = self._entries.get(message_id)
            if entry is None:
                return None
            entry.showing_original = not entry.showing_original
            return entry.showing_original

    def resolve(self, message_id: Hashable, content: str) -> Optional[TranslationSuccess]:
        """Return the translation to display for a message, if any.

        An entry whose source text no longer appears in the message content
        (the message was edited) is dropped.
        """

        with self._lock:
            entry = self._entries.get(message_id)
            if entry is None or entry.showing_original:
                return None
            if entry.source_text not in content:
                del self._entries[message_id]
                return None
            return entry
