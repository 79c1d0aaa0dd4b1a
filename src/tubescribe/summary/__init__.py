"""LLM summaries: prompt building, provider adapters, and the generation service."""

from tubescribe.summary.prompts import build_prompt
from tubescribe.summary.service import (
    SummaryService,
    build_service,
    generate_all_summaries,
    generate_summary,
)

__all__ = [
    "SummaryService",
    "build_prompt",
    "build_service",
    "generate_all_summaries",
    "generate_summary",
]
