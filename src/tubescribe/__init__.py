"""tubescribe: clean YouTube caption transcripts and summarize them with LLMs."""

__version__ = "0.1.0"

from tubescribe.ingestion import parse_transcript, process_transcript  # noqa: E402
from tubescribe.summary import (  # noqa: E402
    build_prompt,
    generate_all_summaries,
    generate_summary,
)

__all__ = [
    "__version__",
    "build_prompt",
    "generate_all_summaries",
    "generate_summary",
    "parse_transcript",
    "process_transcript",
]
