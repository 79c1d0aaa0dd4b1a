"""Step 2: Remove repeated phrases and sentences from auto-generated captions.

Auto-captions repeat themselves heavily: rolling captions restate the
previous line, speaker-change markers stack up, and the capture pipeline
leaves bold label residue behind. Deduplication works on the concatenated
text of the whole transcript and maps the surviving sentences back onto
the original segments by position.
"""

from __future__ import annotations

import re
from typing import Sequence

from tubescribe.ingestion.text import normalize_for_comparison, normalize_whitespace
from tubescribe.models.transcript import Segment
from tubescribe.utils.progress import log_step

MAX_PHRASE_WORDS = 10
MIN_PHRASE_WORDS = 2
MIN_UNIT_LENGTH = 8
MIN_KEY_LENGTH = 10

_MARKER_RUN = re.compile(r"(>>\s*)+")
_LABEL_RUN = re.compile(r"(\*\*[^*]*\*\*:\s*)+")
_PHRASE_RUNS = [
    re.compile(rf"\b((?:\w+\s+){{{n - 1}}}\w+)(?:\s+\1)+\b", re.IGNORECASE)
    for n in range(MAX_PHRASE_WORDS, MIN_PHRASE_WORDS - 1, -1)
]
_WORD_RUN = re.compile(r"\b(\w+)(?:\s+\1\b)+", re.IGNORECASE)
_UNIT = re.compile(r"[^.!?]+[.!?]*")


def collapse_repetitions(text: str) -> str:
    """Collapse marker runs, label residue, repeated phrases and words."""
    text = _MARKER_RUN.sub(">> ", text)
    text = _LABEL_RUN.sub("", text)

    # Collapsing a word run can expose a new phrase run ("go on on go on"),
    # so repeat until nothing changes
    previous = None
    while text != previous:
        previous = text
        # Longest phrases first so shorter sub-phrases survive until their turn
        for pattern in _PHRASE_RUNS:
            text = pattern.sub(r"\1", text)
        text = _WORD_RUN.sub(r"\1", text)

    return normalize_whitespace(text)


def split_units(text: str) -> list[str]:
    """Split on sentence punctuation, dropping fragments under 8 characters.

    Each unit keeps its closing punctuation, so re-joining and re-splitting
    the output yields the same units.
    """
    units = []
    for match in _UNIT.finditer(text):
        unit = match.group().strip()
        if len(unit.rstrip(".!?").strip()) < MIN_UNIT_LENGTH:
            continue
        units.append(unit)
    return units


def deduplicate(segments: Sequence[Segment]) -> list[Segment]:
    """Deduplicate the transcript, first occurrence wins.

    Surviving sentence ``i`` takes the timing of original segment ``i``;
    once the originals run out, remaining sentences are dropped.
    """
    if not segments:
        return []

    cleaned = collapse_repetitions(" ".join(seg.text for seg in segments))

    seen: set[str] = set()
    units: list[str] = []
    for unit in split_units(cleaned):
        key = normalize_for_comparison(unit)
        if len(key) > MIN_KEY_LENGTH and key not in seen:
            seen.add(key)
            units.append(unit)

    result = [
        original.model_copy(update={"text": unit})
        for original, unit in zip(segments, units)
    ]

    log_step("Dedup", f"{len(segments)} segments → {len(result)} after deduplication")
    return result
