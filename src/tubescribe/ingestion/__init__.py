"""Caption ingestion: parsing, cleaning, deduplication, speaker attribution."""

from tubescribe.ingestion.captions import iter_segments, parse_timestamp, parse_transcript
from tubescribe.ingestion.process import process_transcript

__all__ = [
    "iter_segments",
    "parse_timestamp",
    "parse_transcript",
    "process_transcript",
]
