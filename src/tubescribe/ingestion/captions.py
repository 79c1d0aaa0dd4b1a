"""Step 1: Parse time-coded subtitle (SRT) documents into segments."""

from __future__ import annotations

import re
from typing import Iterator

from tubescribe.errors import CaptionParseError
from tubescribe.ingestion.text import clean_text
from tubescribe.models.transcript import Segment
from tubescribe.utils.progress import log_step

_TIMESTAMP = re.compile(r"^(\d{1,2}):(\d{2}):(\d{2})(?:[,.](\d{3}))?$")
_TIMING_LINE = re.compile(
    r"^(\d{2}:\d{2}:\d{2}(?:[,.]\d{3})?)\s*-->\s*(\d{2}:\d{2}:\d{2}(?:[,.]\d{3})?)(?:\s.*)?$"
)
_BLOCK_SEPARATOR = re.compile(r"\n\s*\n")
_SEQUENCE_LINE = re.compile(r"^\d+$")
_TIMESTAMP_LINE = re.compile(r"^\d+:\d{2}:\d{2}")

MIN_RAW_TEXT_LENGTH = 5


def parse_timestamp(value: str) -> float:
    """Parse ``HH:MM:SS,mmm`` / ``HH:MM:SS.mmm`` / ``HH:MM:SS`` into seconds."""
    match = _TIMESTAMP.match(value.strip())
    if not match:
        raise CaptionParseError(f"Unparseable timestamp: {value!r}")

    hours, minutes, seconds = (int(g) for g in match.group(1, 2, 3))
    millis = int(match.group(4) or 0)
    if minutes > 59 or seconds > 59:
        raise CaptionParseError(f"Timestamp out of range: {value!r}")

    return hours * 3600 + minutes * 60 + seconds + millis / 1000


def format_timestamp(seconds: float, separator: str = ",") -> str:
    """Format seconds as ``HH:MM:SS,mmm`` (pass ``"."`` for WebVTT)."""
    total_ms = max(0, round(seconds * 1000))
    hours, rem = divmod(total_ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, millis = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}{separator}{millis:03d}"


def _decode(document: str | bytes) -> str:
    if isinstance(document, bytes):
        try:
            text = document.decode("utf-8")
        except UnicodeDecodeError:
            text = document.decode("latin-1")
    else:
        text = document
    text = text.lstrip("\ufeff")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _parse_block(block: str) -> Segment | None:
    lines = block.strip().split("\n")
    if len(lines) < 3:
        return None

    timing = _TIMING_LINE.match(lines[1].strip())
    if not timing:
        return None

    try:
        start = parse_timestamp(timing.group(1))
        end = parse_timestamp(timing.group(2))
    except CaptionParseError:
        return None

    text_lines = [
        line.strip()
        for line in lines[2:]
        if line.strip()
        and not _SEQUENCE_LINE.match(line.strip())
        and not _TIMESTAMP_LINE.match(line.strip())
    ]
    raw_text = " ".join(text_lines)
    if len(raw_text.strip()) < MIN_RAW_TEXT_LENGTH:
        return None

    text = clean_text(raw_text)
    if not text:
        return None

    return Segment(text=text, start=start, duration=max(0.0, end - start))


def iter_segments(document: str | bytes) -> Iterator[Segment]:
    """Lazily yield segments; malformed blocks are skipped."""
    text = _decode(document)
    if not text.strip():
        return

    for block in _BLOCK_SEPARATOR.split(text.strip()):
        segment = _parse_block(block)
        if segment is not None:
            yield segment


def parse_transcript(document: str | bytes) -> list[Segment]:
    """Parse a whole caption document. Empty input gives an empty list."""
    segments = list(iter_segments(document))
    log_step("Captions", f"Parsed {len(segments)} segments")
    return segments
