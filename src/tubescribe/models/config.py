"""Configuration models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProcessingOptions(BaseModel):
    """Which transcript processing stages to run."""

    speaker_detection: bool = True
    deduplication: bool = True
    normalize_text: bool = True


class LLMConfig(BaseModel):
    """Request and retry settings shared by every provider."""

    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    max_retries: int = Field(default=3, ge=1, le=10)
    initial_retry_delay: float = Field(default=1.0, ge=0.0, le=60.0)
    request_timeout: float = Field(default=120.0, gt=0.0, le=600.0)


class ProviderConfig(BaseModel):
    """Static description of one provider's settings."""

    model_config = ConfigDict(frozen=True)

    api_key_env: str
    model_env: str
    model_name_env: str
    default_model: str
    default_model_name: str
    max_output_tokens: int = Field(default=16384, ge=256)
    api_version: str | None = None


class AppConfig(BaseModel):
    """Contents of tubescribe.yaml."""

    processing: ProcessingOptions = Field(default_factory=ProcessingOptions)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    prompts_dir: str | None = None
