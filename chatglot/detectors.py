"""Pattern matchers for markup that must survive translation untouched."""

from __future__ import annotations

import re
from typing import Callable, List, Sequence

from .structures import Span

EMOJI_PATTERN = re.compile(r"<a?:[A-Za-z0-9_]+:\d+>")
MENTION_PATTERN = re.compile(r"<@!?\d+>|<@&\d+>|<#\d+>")

CODE_BLOCK_PATTERN = re.compile(r"```([\s\S]*?)```")
INLINE_CODE_PATTERN = re.compile(r"`([^`]+)`")
SPOILER_PATTERN = re.compile(r"\|\|([\s\S]*?)\|\|")
# One span per quoted line; consecutive quote lines are not joined.
QUOTE_PATTERN = re.compile(r"^(>.+?)$", re.MULTILINE)

BOLD_PATTERN = re.compile(r"\*\*([^*]+?)\*\*")
ITALIC_STAR_PATTERN = re.compile(r"\*([^*]+?)\*")
UNDERLINE_PATTERN = re.compile(r"__([^_]+?)__")
ITALIC_UNDERSCORE_PATTERN = re.compile(r"_([^_]+?)_")
STRIKETHROUGH_PATTERN = re.compile(r"~~([^~]+?)~~")

BLOCK_PATTERNS = (
    CODE_BLOCK_PATTERN,
    INLINE_CODE_PATTERN,
    SPOILER_PATTERN,
    QUOTE_PATTERN,
)
INLINE_PATTERNS = (
    BOLD_PATTERN,
    ITALIC_STAR_PATTERN,
    UNDERLINE_PATTERN,
    ITALIC_UNDERSCORE_PATTERN,
    STRIKETHROUGH_PATTERN,
)


def _find_all(patterns: Sequence[re.Pattern[str]], text: str) -> List[Span]:
    spans: List[Span] = []
    for pattern in patterns:
        for match in pattern.finditer(text):
            if match.end() == match.start():
                continue
            spans.append(
                Span(
                    start_index=match.start(),
                    end_index=match.end(),
                    source_text=match.group(0),
                )
            )
    spans.sort(key=lambda span: span.start_index)
    return spans


def find_emoji(text: str) -> List[Span]:
    """Custom emoji tags, static or animated."""

    return _find_all((EMOJI_PATTERN,), text)


def find_mentions(text: str) -> List[Span]:
    """User, nickname, role and channel mentions."""

    return _find_all((MENTION_PATTERN,), text)


def find_block_formatting(text: str) -> List[Span]:
    """Code fences, inline code, spoilers and quote lines."""

    return _find_all(BLOCK_PATTERNS, text)


def find_inline_formatting(text: str) -> List[Span]:
    """Bold, italic, underline and strikethrough runs including delimiters."""

    return _find_all(INLINE_PATTERNS, text)


DETECTORS: Sequence[Callable[[str], List[Span]]] = (
    find_emoji,
    find_mentions,
    find_block_formatting,
    find_inline_formatting,
)


def detect_spans(text: str) -> List[Span]:
    """Run every detector and return the raw, possibly overlapping spans."""

    spans: List[Span] = []
    for detector in DETECTORS:
        spans.extend(detector(text))
    return spans
