"""Tests for repetition collapsing and sentence-level deduplication."""

import pytest

from tubescribe.ingestion.dedup import collapse_repetitions, deduplicate, split_units
from tubescribe.models.transcript import Segment


def _segments(*texts):
    return [Segment(text=t, start=i * 2.0, duration=2.0) for i, t in enumerate(texts)]


class TestCollapseRepetitions:
    def test_marker_runs(self):
        assert collapse_repetitions(">> >> >> Hi there") == ">> Hi there"

    def test_label_residue(self):
        assert collapse_repetitions("**Host**: **Host**: hello again") == "hello again"

    def test_repeated_phrase(self):
        text = "we shipped the new feature we shipped the new feature last week"
        assert collapse_repetitions(text) == "we shipped the new feature last week"

    def test_repeated_words_case_insensitive(self):
        assert collapse_repetitions("so So we we built it") == "so we built it"

    def test_whitespace(self):
        assert collapse_repetitions("  lots   of\n space ") == "lots of space"

    def test_word_collapse_exposing_phrase_run(self):
        assert collapse_repetitions("go on on go on") == "go on"
        assert collapse_repetitions(collapse_repetitions("go on on go on")) == "go on"


class TestSplitUnits:
    def test_keeps_punctuation_and_drops_fragments(self):
        assert split_units("Right. This is the first point! Ok? And a second one.") == [
            "This is the first point!",
            "And a second one.",
        ]


class TestDeduplicate:
    def test_empty(self):
        assert deduplicate([]) == []

    def test_exact_repeats_collapse(self):
        result = deduplicate(_segments("Hello world", "Hello world", "This is a test"))
        joined = " ".join(seg.text for seg in result)
        assert joined.count("Hello world") == 1
        assert "This is a test" in joined

    def test_first_occurrence_wins_and_pairs_by_position(self):
        segments = _segments(
            "We talked about pricing today.",
            "We talked about pricing today.",
            "Then we moved on to hiring.",
        )
        result = deduplicate(segments)

        assert [s.text for s in result] == [
            "We talked about pricing today.",
            "Then we moved on to hiring.",
        ]
        assert [s.start for s in result] == [segments[0].start, segments[1].start]

    def test_near_duplicates_by_normalized_key(self):
        result = deduplicate(_segments("Pricing is hard, really.", "pricing is HARD really!"))
        assert [s.text for s in result] == ["Pricing is hard, really."]

    @pytest.mark.parametrize(
        "texts",
        [
            (
                "So so the the first thing we did was talk to customers.",
                "The first thing we did was talk to customers.",
                ">> >> Then we we rebuilt the onboarding flow.",
                "**Guest**: **Guest**: It took about three months.",
                "It took about three months.",
            ),
            (
                "We go on on go on with the plan today.",
                "And then we ship it to customers.",
            ),
        ],
    )
    def test_idempotent(self, texts):
        once = deduplicate(_segments(*texts))
        twice = deduplicate(once)
        assert [s.text for s in twice] == [s.text for s in once]

    def test_output_not_longer_and_ordered(self):
        segments = _segments(*(f"Sentence number {n} is right here." for n in range(10)))
        result = deduplicate(segments)
        assert len(result) <= len(segments)
        starts = [s.start for s in result]
        assert starts == sorted(starts)

    def test_input_unchanged(self):
        segments = _segments("Hello world Hello world.", "Another sentence here.")
        deduplicate(segments)
        assert segments[0].text == "Hello world Hello world."
