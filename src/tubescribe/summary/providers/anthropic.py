"""Anthropic Messages API adapter."""

from __future__ import annotations

from typing import Any

from tubescribe.models.config import ProviderConfig
from tubescribe.models.summary import PromptRequest
from tubescribe.summary.prompts import build_prompt_parts
from tubescribe.summary.providers.base import dig
from tubescribe.utils.progress import log_warning

MESSAGES_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_API_VERSION = "2023-06-01"


class AnthropicAdapter:
    """Claude via the Messages API. Takes a separate system prompt."""

    name = "Anthropic"

    def build_url(self, model: str, api_key: str) -> str:
        return MESSAGES_URL

    def build_headers(self, api_key: str, config: ProviderConfig) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": config.api_version or DEFAULT_API_VERSION,
        }

    def build_body(
        self,
        model: str,
        request: PromptRequest,
        config: ProviderConfig,
        *,
        temperature: float,
    ) -> dict[str, Any]:
        parts = build_prompt_parts(
            request.template, request.transcript, request.style, request.video_url
        )
        return {
            "model": model,
            "max_tokens": config.max_output_tokens,
            "system": parts.system_prompt,
            "messages": [{"role": "user", "content": parts.user_message}],
            "temperature": temperature,
        }

    def extract_content(self, data: dict[str, Any]) -> str | None:
        return dig(data, "content", 0, "text")

    def validate_api_key(self, api_key: str) -> None:
        if not api_key.startswith("sk-ant-"):
            log_warning("Anthropic API key format looks wrong (expected an 'sk-ant-' prefix)")
