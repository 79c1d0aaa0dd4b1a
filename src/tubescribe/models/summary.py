"""Summary generation data models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class SummaryStyle(str, Enum):
    """Prompt template and validation rules to apply."""

    BULLETS = "bullets"
    NARRATIVE = "narrative"
    TECHNICAL = "technical"


class ProviderKey(str, Enum):
    """Supported LLM providers."""

    ANTHROPIC = "anthropic"
    GOOGLE_GEMINI = "google-gemini"
    PERPLEXITY = "perplexity"


class PromptParts(BaseModel):
    """Prompt split into behavioural instructions and task content."""

    model_config = ConfigDict(frozen=True)

    system_prompt: str
    user_message: str


class PromptRequest(BaseModel):
    """Everything an adapter needs to build a request body."""

    model_config = ConfigDict(frozen=True)

    template: str
    transcript: str
    style: SummaryStyle = SummaryStyle.BULLETS
    video_url: str | None = None


class SummaryResult(BaseModel):
    """Outcome of one (provider, request) pipeline."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderKey
    model_name: str
    summary: str = ""
    success: bool
    error: str | None = None
