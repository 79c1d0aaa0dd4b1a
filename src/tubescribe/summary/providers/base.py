"""Base protocol for LLM provider adapters."""

from __future__ import annotations

from typing import Any, Protocol

from tubescribe.models.config import ProviderConfig
from tubescribe.models.summary import PromptRequest


class ProviderAdapter(Protocol):
    """Provider-specific request building and response parsing.

    Adapters may also define ``validate_api_key(api_key)`` (warn or raise
    before any request) and ``validate_response(content, request)`` (raise a
    retryable error for structurally unusable output).
    """

    name: str

    def build_url(self, model: str, api_key: str) -> str: ...

    def build_headers(self, api_key: str, config: ProviderConfig) -> dict[str, str]: ...

    def build_body(
        self,
        model: str,
        request: PromptRequest,
        config: ProviderConfig,
        *,
        temperature: float,
    ) -> dict[str, Any]: ...

    def extract_content(self, data: dict[str, Any]) -> str | None: ...


def dig(data: Any, *path: str | int) -> Any:
    """Follow keys/indexes into parsed JSON, returning None on any miss."""
    for step in path:
        try:
            data = data[step]
        except (KeyError, IndexError, TypeError):
            return None
    return data
