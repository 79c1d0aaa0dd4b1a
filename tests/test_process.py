"""Tests for the processing pipeline and transcript assembly."""

import pytest

from tubescribe.ingestion import parse_transcript, process_transcript
from tubescribe.ingestion.process import assemble, count_words
from tubescribe.models.config import ProcessingOptions
from tubescribe.models.transcript import Segment

ALL_OFF = ProcessingOptions(speaker_detection=False, deduplication=False, normalize_text=False)


class TestCountWords:
    def test_words(self):
        assert count_words("one two  three") == 3

    def test_empty_counts_as_one(self):
        assert count_words("") == 1


class TestAssemble:
    def test_aggregates(self):
        transcript = assemble([
            Segment(text="hello world", start=0, duration=2, speaker="Host"),
            Segment(text="", start=2, duration=1.5),
            Segment(text="fine thanks", start=3.5, duration=1, speaker="Guest"),
        ])
        assert transcript.word_count == 5
        assert transcript.total_duration == pytest.approx(4.5)
        assert transcript.speakers == frozenset({"Host", "Guest"})
        assert len(transcript.segments) == 3


class TestProcessTranscript:
    def test_full_pipeline(self, sample_srt):
        transcript = process_transcript(parse_transcript(sample_srt))

        assert [s.speaker for s in transcript.segments] == ["Host", "Host", "Guest"]
        assert transcript.speakers == frozenset({"Host", "Guest"})
        assert transcript.total_duration == pytest.approx(10.75)

    def test_all_stages_disabled(self):
        segments = [
            Segment(text="  <b>raw</b>  text ", start=0, duration=1),
            Segment(text="  <b>raw</b>  text ", start=1, duration=1),
        ]
        transcript = process_transcript(segments, ALL_OFF)
        assert [s.text for s in transcript.segments] == [s.text for s in segments]
        assert transcript.speakers == frozenset()

    def test_normalize_keeps_emptied_segments(self):
        segments = [
            Segment(text="[Music]", start=0, duration=1),
            Segment(text="hello world", start=1, duration=1),
        ]
        options = ProcessingOptions(speaker_detection=False, deduplication=False)
        transcript = process_transcript(segments, options)

        assert [s.text for s in transcript.segments] == ["", "hello world"]
        assert transcript.word_count == 3

    def test_input_not_mutated(self, sample_srt):
        segments = parse_transcript(sample_srt)
        before = [s.model_dump() for s in segments]
        process_transcript(segments)
        assert [s.model_dump() for s in segments] == before
