"""Step 4: Run the processing stages and assemble a ProcessedTranscript."""

from __future__ import annotations

import re
from typing import Sequence

from tubescribe.ingestion.dedup import deduplicate
from tubescribe.ingestion.speakers import attribute_speakers
from tubescribe.ingestion.text import clean_text
from tubescribe.models.config import ProcessingOptions
from tubescribe.models.transcript import ProcessedTranscript, Segment
from tubescribe.utils.progress import log_step

_TOKEN_SPLIT = re.compile(r"\s+")


def count_words(text: str) -> int:
    """Whitespace-delimited token count; an empty string counts as one."""
    return len(_TOKEN_SPLIT.split(text))


def assemble(segments: Sequence[Segment]) -> ProcessedTranscript:
    """Aggregate word count, duration and speaker set."""
    return ProcessedTranscript(
        segments=tuple(segments),
        speakers=frozenset(seg.speaker for seg in segments if seg.speaker),
        total_duration=sum(seg.duration for seg in segments),
        word_count=sum(count_words(seg.text) for seg in segments),
    )


def process_transcript(
    segments: Sequence[Segment],
    options: ProcessingOptions | None = None,
) -> ProcessedTranscript:
    """Clean, deduplicate and attribute speakers, in that order.

    Each enabled stage returns new segments; the input is never modified.
    """
    options = options or ProcessingOptions()
    processed = list(segments)

    if options.normalize_text:
        processed = [seg.model_copy(update={"text": clean_text(seg.text)}) for seg in processed]

    if options.deduplication:
        processed = deduplicate(processed)

    if options.speaker_detection:
        processed = attribute_speakers(processed)

    transcript = assemble(processed)
    log_step(
        "Transcript",
        f"{len(transcript.segments)} segments, {transcript.word_count} words, "
        f"speakers: {', '.join(sorted(transcript.speakers)) or 'none'}",
    )
    return transcript
