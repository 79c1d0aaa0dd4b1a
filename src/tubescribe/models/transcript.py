"""Transcript data models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Segment(BaseModel):
    """One timed unit of transcript text."""

    model_config = ConfigDict(frozen=True)

    text: str
    start: float = Field(ge=0.0)
    duration: float = Field(default=0.0, ge=0.0)
    speaker: str | None = None

    @property
    def end(self) -> float:
        return self.start + self.duration


class ProcessedTranscript(BaseModel):
    """Cleaned, deduplicated and speaker-attributed transcript."""

    model_config = ConfigDict(frozen=True)

    segments: tuple[Segment, ...] = ()
    speakers: frozenset[str] = frozenset()
    total_duration: float = 0.0
    word_count: int = 0
