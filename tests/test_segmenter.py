import pytest

from chatglot.errors import ReconstructionError
from chatglot.segmenter import merge_spans, plan_message, reconstruct, split_text
from chatglot.structures import Span, TranslatableChunk


TEXT = "abcdefghijklmnopqrstuvwxyz"


def span(start, end, text=TEXT):
    return Span(start_index=start, end_index=end, source_text=text[start:end])


def covered(spans):
    indices = set()
    for item in spans:
        indices.update(range(item.start_index, item.end_index))
    return indices


class TestMergeSpans:

    def test_empty_input(self):
        assert merge_spans([]) == []

    def test_overlapping_spans_union(self):
        merged = merge_spans([span(0, 5), span(3, 8)])
        assert merged == [span(0, 8)]

    def test_touching_spans_merge(self):
        merged = merge_spans([span(0, 3), span(3, 5)])
        assert merged == [span(0, 5)]

    def test_contained_span_is_absorbed(self):
        merged = merge_spans([span(0, 10), span(2, 4)])
        assert merged == [span(0, 10)]

    def test_disjoint_spans_are_kept_sorted(self):
        merged = merge_spans([span(10, 12), span(0, 2), span(5, 7)])
        assert merged == [span(0, 2), span(5, 7), span(10, 12)]

    def test_cover_matches_input_union(self):
        raw = [span(14, 20), span(1, 4), span(2, 6), span(18, 22), span(9, 10), span(6, 7)]
        merged = merge_spans(raw)

        starts = [item.start_index for item in merged]
        assert starts == sorted(starts)
        for left, right in zip(merged, merged[1:]):
            assert left.end_index < right.start_index
        assert covered(merged) == covered(raw)
        for item in merged:
            assert item.source_text == TEXT[item.start_index:item.end_index]


class TestSplitText:

    def test_chunks_between_segments(self):
        text = "Hello **world** <@1>!"
        chunks = split_text(text, [Span(6, 15, "**world**"), Span(16, 20, "<@1>")])
        assert chunks == [
            TranslatableChunk("Hello ", 0),
            TranslatableChunk(" ", 15),
            TranslatableChunk("!", 20),
        ]

    def test_segment_at_start_has_no_leading_chunk(self):
        chunks = split_text("<@1> hi", [Span(0, 4, "<@1>")])
        assert chunks == [TranslatableChunk(" hi", 4)]

    def test_adjacent_segments_produce_no_empty_chunk(self):
        text = "<@1><@2>"
        segments = merge_spans([Span(0, 4, "<@1>"), Span(4, 8, "<@2>")])
        assert split_text(text, segments) == []

    def test_no_segments(self):
        assert split_text("plain", []) == [TranslatableChunk("plain", 0)]

    def test_empty_text(self):
        assert split_text("", []) == []


class TestReconstruct:

    @pytest.mark.parametrize(
        "text",
        [
            "Hello **world** <@1>!",
            "<@1> starts with a mention",
            "**all bold**",
            "ends with code `x`",
            "> quote\nthen *prose* <:e:1><#2> tail",
            "",
        ],
    )
    def test_identity_when_nothing_changes(self, text):
        plan = plan_message(text)
        rebuilt = reconstruct(plan.chunks, [c.text for c in plan.chunks], plan.segments)
        assert rebuilt == text

    def test_leading_segment_stays_in_front(self):
        plan = plan_message("**Hi** there friend")
        rebuilt = reconstruct(plan.chunks, ["ALLÍ AMIGO"], plan.segments)
        assert rebuilt == "**Hi**ALLÍ AMIGO"

    def test_translated_lengths_may_differ(self):
        plan = plan_message("a <@1> b")
        rebuilt = reconstruct(plan.chunks, ["uno ", " dos dos"], plan.segments)
        assert rebuilt == "uno <@1> dos dos"

    def test_mismatched_translation_count(self):
        plan = plan_message("a <@1> b")
        with pytest.raises(ReconstructionError):
            reconstruct(plan.chunks, ["only one"], plan.segments)
