"""Pydantic data models for tubescribe."""

from tubescribe.models.config import (
    AppConfig,
    LLMConfig,
    ProcessingOptions,
    ProviderConfig,
)
from tubescribe.models.summary import (
    PromptParts,
    PromptRequest,
    ProviderKey,
    SummaryResult,
    SummaryStyle,
)
from tubescribe.models.transcript import ProcessedTranscript, Segment

__all__ = [
    "AppConfig",
    "LLMConfig",
    "ProcessingOptions",
    "ProviderConfig",
    "PromptParts",
    "PromptRequest",
    "ProviderKey",
    "SummaryResult",
    "SummaryStyle",
    "ProcessedTranscript",
    "Segment",
]
