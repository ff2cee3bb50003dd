"""Splitting messages into protected segments and translatable chunks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from .detectors import detect_spans
from .errors import ReconstructionError
from .structures import Span, TranslatableChunk


@dataclass
class MessagePlan:
    """The protected cover of one message and the prose around it."""

    text: str
    segments: List[Span] = field(default_factory=list)
    chunks: List[TranslatableChunk] = field(default_factory=list)


def merge_spans(spans: Sequence[Span]) -> List[Span]:
    """Collapse overlapping or touching spans into a sorted disjoint cover."""

    if not spans:
        return []

    ordered = sorted(spans, key=lambda span: span.start_index)
    merged: List[Span] = []
    current = ordered[0]

    for candidate in ordered[1:]:
        if current.end_index >= candidate.start_index:
            overlap = current.end_index - candidate.start_index
            current = Span(
                start_index=current.start_index,
                end_index=max(current.end_index, candidate.end_index),
                source_text=current.source_text + candidate.source_text[overlap:],
            )
        else:
            merged.append(current)
            current = candidate

    merged.append(current)
    return merged


def split_text(text: str, segments: Sequence[Span]) -> List[TranslatableChunk]:
    """Return the gaps between merged segments, in order, never empty."""

    chunks: List[TranslatableChunk] = []
    last_index = 0
    for segment in segments:
        if last_index < segment.start_index:
            chunks.append(
                TranslatableChunk(
                    text=text[last_index:segment.start_index],
                    original_offset=last_index,
                )
            )
        last_index = segment.end_index

    if last_index < len(text):
        chunks.append(
            TranslatableChunk(text=text[last_index:], original_offset=last_index)
        )
    return chunks


def plan_message(text: str) -> MessagePlan:
    """Detect, merge and split a message in one pass."""

    segments = merge_spans(detect_spans(text))
    return MessagePlan(text=text, segments=segments, chunks=split_text(text, segments))


def reconstruct(
    chunks: Sequence[TranslatableChunk],
    translations: Sequence[str],
    segments: Sequence[Span],
) -> str:
    """Interleave translated chunks and preserved segments by original offset.

    Both inputs are already ordered, so this is a two-way merge keyed on
    ``original_offset`` and ``start_index``. A message that opens with a
    protected segment therefore keeps its segment in front.
    """

    if len(chunks) != len(translations):
        raise ReconstructionError(
            f"Expected {len(chunks)} translated parts, received {len(translations)}."
        )

    parts: List[str] = []
    chunk_idx = 0
    segment_idx = 0
    while chunk_idx < len(chunks) or segment_idx < len(segments):
        take_chunk = segment_idx >= len(segments) or (
            chunk_idx < len(chunks)
            and chunks[chunk_idx].original_offset < segments[segment_idx].start_index
        )
        if take_chunk:
            parts.append(translations[chunk_idx])
            chunk_idx += 1
        else:
            parts.append(segments[segment_idx].source_text)
            segment_idx += 1
    return "".join(parts)
