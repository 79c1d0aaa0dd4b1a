"""Google Gemini generateContent adapter."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from tubescribe.models.config import ProviderConfig
from tubescribe.models.summary import PromptRequest
from tubescribe.summary.prompts import build_combined_prompt
from tubescribe.summary.providers.base import dig

API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiAdapter:
    """Gemini. The API key travels as a query parameter."""

    name = "Gemini"

    def build_url(self, model: str, api_key: str) -> str:
        return f"{API_BASE}/{quote(model, safe='')}:generateContent?key={quote(api_key, safe='')}"

    def build_headers(self, api_key: str, config: ProviderConfig) -> dict[str, str]:
        return {"Content-Type": "application/json"}

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
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": config.max_output_tokens,
                "temperature": temperature,
            },
        }

    def extract_content(self, data: dict[str, Any]) -> str | None:
        return dig(data, "candidates", 0, "content", "parts", 0, "text")
