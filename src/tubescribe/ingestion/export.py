"""Render a processed transcript as text, JSON, SRT or WebVTT."""

from __future__ import annotations

import json
import re
from typing import Sequence

from tubescribe.ingestion.captions import format_timestamp
from tubescribe.models.transcript import ProcessedTranscript, Segment

EXPORT_FORMATS = ("txt", "json", "srt", "vtt")

ACCURACY_NOTE = "*Note: Speaker identification is automated and may not be 100% accurate.*"

_ENDS_SENTENCE = re.compile(r"[.!?]$")


def format_clock(seconds: float) -> str:
    """Format seconds as ``[HH:MM:SS]`` for inline transcript citations."""
    total = int(seconds)
    return f"[{total // 3600:02d}:{total % 3600 // 60:02d}:{total % 60:02d}]"


def format_duration(seconds: float) -> str:
    """Format seconds as ``M:SS``, or ``H:MM:SS`` past the hour."""
    total = int(seconds)
    hours, minutes, secs = total // 3600, total % 3600 // 60, total % 60
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def _speaker_prefix(seg: Segment) -> str:
    return f"{seg.speaker}: " if seg.speaker else ""


def transcript_to_text(transcript: ProcessedTranscript) -> str:
    """Plain text, one ``Speaker: text`` block per segment."""
    return "\n\n".join(f"{_speaker_prefix(seg)}{seg.text}" for seg in transcript.segments)


def transcript_to_timestamped_text(segments: Sequence[Segment]) -> str:
    """Like transcript_to_text, with a ``[HH:MM:SS]`` start time per block."""
    return "\n\n".join(
        f"{format_clock(seg.start)} {_speaker_prefix(seg)}{seg.text}" for seg in segments
    )


def _join_paragraph(texts: list[str]) -> str:
    paragraph = ""
    for text in texts:
        if not paragraph:
            paragraph = text
        elif _ENDS_SENTENCE.search(paragraph):
            paragraph += "  " + text
        else:
            paragraph += " " + text
    return paragraph


def format_with_speakers(segments: Sequence[Segment]) -> str:
    """Readable paragraphs with a ``**Speaker**:`` label at each speaker change.

    Unlabelled segments continue the current paragraph.
    """
    paragraphs: list[tuple[str | None, list[str]]] = []
    current: str | None = None

    for seg in segments:
        text = seg.text.strip()
        if not text:
            continue
        if seg.speaker and seg.speaker != current:
            current = seg.speaker
            paragraphs.append((current, [text]))
        elif paragraphs:
            paragraphs[-1][1].append(text)
        else:
            paragraphs.append((None, [text]))

    blocks = []
    for speaker, texts in paragraphs:
        body = _join_paragraph(texts)
        blocks.append(f"**{speaker}**: {body}" if speaker else body)
    return "\n\n".join(blocks)


def _export_text(transcript: ProcessedTranscript, include_metadata: bool) -> str:
    parts = []
    if include_metadata:
        parts.append(
            "# Transcript\n"
            f"Total Duration: {format_duration(transcript.total_duration)}\n"
            f"Word Count: {transcript.word_count}\n"
            f"Speakers: {', '.join(sorted(transcript.speakers))}\n"
        )
    parts.append(format_with_speakers(transcript.segments))
    parts.append(f"---\n{ACCURACY_NOTE}\n")
    return "\n\n".join(parts)


def _export_json(transcript: ProcessedTranscript, include_metadata: bool) -> str:
    data: dict = {}
    if include_metadata:
        data["metadata"] = {
            "total_duration": transcript.total_duration,
            "word_count": transcript.word_count,
            "speakers": sorted(transcript.speakers),
            "segment_count": len(transcript.segments),
        }
    data["segments"] = [seg.model_dump(mode="json") for seg in transcript.segments]
    return json.dumps(data, indent=2, ensure_ascii=False)


def _export_srt(transcript: ProcessedTranscript) -> str:
    blocks = [
        f"{i}\n{format_timestamp(seg.start)} --> {format_timestamp(seg.end)}\n{seg.text}\n"
        for i, seg in enumerate(transcript.segments, start=1)
    ]
    return "\n".join(blocks)


def _export_vtt(transcript: ProcessedTranscript) -> str:
    blocks = [
        f"{format_timestamp(seg.start, '.')} --> {format_timestamp(seg.end, '.')}\n{seg.text}\n"
        for seg in transcript.segments
    ]
    return "WEBVTT\n\n" + "\n".join(blocks)


def export_transcript(
    transcript: ProcessedTranscript,
    fmt: str,
    include_metadata: bool = True,
) -> str:
    """Serialize ``transcript`` as one of EXPORT_FORMATS."""
    if fmt == "txt":
        return _export_text(transcript, include_metadata)
    if fmt == "json":
        return _export_json(transcript, include_metadata)
    if fmt == "srt":
        return _export_srt(transcript)
    if fmt == "vtt":
        return _export_vtt(transcript)
    raise ValueError(f"Unsupported export format: {fmt}")
