"""Tests for transcript rendering and export formats."""

import json

import pytest

from tubescribe.ingestion.export import (
    ACCURACY_NOTE,
    export_transcript,
    format_clock,
    format_duration,
    format_with_speakers,
    transcript_to_text,
    transcript_to_timestamped_text,
)
from tubescribe.ingestion.process import assemble
from tubescribe.models.transcript import Segment


@pytest.fixture
def transcript():
    return assemble([
        Segment(text="Welcome to the show.", start=1, duration=3, speaker="Host"),
        Segment(text="Our guest built a company", start=4, duration=2),
        Segment(text="Thanks for having me!", start=3725, duration=2.5, speaker="Guest"),
    ])


class TestFormatting:
    def test_clock(self):
        assert format_clock(3725.9) == "[01:02:05]"

    def test_duration(self):
        assert format_duration(65) == "1:05"
        assert format_duration(3725) == "1:02:05"


class TestRendering:
    def test_plain_text(self, transcript):
        assert transcript_to_text(transcript).split("\n\n") == [
            "Host: Welcome to the show.",
            "Our guest built a company",
            "Guest: Thanks for having me!",
        ]

    def test_timestamped(self, transcript):
        lines = transcript_to_timestamped_text(transcript.segments).split("\n\n")
        assert lines[0] == "[00:00:01] Host: Welcome to the show."
        assert lines[2] == "[01:02:05] Guest: Thanks for having me!"

    def test_speaker_paragraphs(self, transcript):
        assert format_with_speakers(transcript.segments) == (
            "**Host**: Welcome to the show.  Our guest built a company\n\n"
            "**Guest**: Thanks for having me!"
        )


class TestExportTranscript:
    def test_txt(self, transcript):
        text = export_transcript(transcript, "txt")
        assert text.startswith("# Transcript\n")
        assert "Speakers: Guest, Host" in text
        assert ACCURACY_NOTE in text

    def test_txt_without_metadata(self, transcript):
        assert not export_transcript(transcript, "txt", include_metadata=False).startswith("# Transcript")

    def test_json(self, transcript):
        data = json.loads(export_transcript(transcript, "json"))
        assert data["metadata"]["segment_count"] == 3
        assert data["metadata"]["speakers"] == ["Guest", "Host"]
        assert data["segments"][0]["text"] == "Welcome to the show."

    def test_srt(self, transcript):
        text = export_transcript(transcript, "srt")
        assert text.startswith("1\n00:00:01,000 --> 00:00:04,000\nWelcome to the show.\n")
        assert "3\n01:02:05,000 --> 01:02:07,500\n" in text

    def test_vtt(self, transcript):
        text = export_transcript(transcript, "vtt")
        assert text.startswith("WEBVTT\n\n00:00:01.000 --> 00:00:04.000\n")

    def test_unknown_format(self, transcript):
        with pytest.raises(ValueError):
            export_transcript(transcript, "docx")
