"""Perplexity chat completions adapter."""

from __future__ import annotations

from typing import Any

from tubescribe.models.config import ProviderConfig
from tubescribe.models.summary import PromptRequest, SummaryStyle
from tubescribe.summary.prompts import build_combined_prompt
from tubescribe.summary.providers.base import dig
from tubescribe.summary.validation import TECHNICAL_SECTIONS, require_sections

CHAT_URL = "https://api.perplexity.ai/chat/completions"

# Present in templates that ask for the numbered technical sections
TECHNICAL_TEMPLATE_MARKER = "### 1. Tools & Technologies"


class PerplexityAdapter:
    """Perplexity Sonar via the OpenAI-style chat completions API."""

    name = "Perplexity"

    def build_url(self, model: str, api_key: str) -> str:
        return CHAT_URL

    def build_headers(self, api_key: str, config: ProviderConfig) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }

    def build_body(
        self,
        model: str,
        request: PromptRequest,
        config: ProviderConfig,
        *,
        temperature: float,
    ) -> dict[str, Any]:
        prompt = build_combined_prompt(
            request.template, request.transcript, request.style, request.video_url
        )
        return {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": config.max_output_tokens,
            "temperature": temperature,
        }

    def extract_content(self, data: dict[str, Any]) -> str | None:
        return dig(data, "choices", 0, "message", "content")

    def validate_response(self, content: str, request: PromptRequest) -> None:
        # Sonar tends to drop the later numbered sections of the technical layout
        if request.style is SummaryStyle.TECHNICAL and TECHNICAL_TEMPLATE_MARKER in request.template:
            require_sections(content, TECHNICAL_SECTIONS, self.name)
