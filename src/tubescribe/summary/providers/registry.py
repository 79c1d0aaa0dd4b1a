"""Explicit ProviderKey → adapter lookup, built once and passed around."""

from __future__ import annotations

from typing import Iterator

from tubescribe.models.summary import ProviderKey
from tubescribe.summary.providers.anthropic import AnthropicAdapter
from tubescribe.summary.providers.base import ProviderAdapter
from tubescribe.summary.providers.gemini import GeminiAdapter
from tubescribe.summary.providers.perplexity import PerplexityAdapter


class AdapterRegistry:
    """Maps each provider to the adapter that speaks its API."""

    def __init__(self, adapters: dict[ProviderKey, ProviderAdapter] | None = None):
        self._adapters: dict[ProviderKey, ProviderAdapter] = dict(adapters or {})

    def register(self, key: ProviderKey | str, adapter: ProviderAdapter) -> None:
        self._adapters[ProviderKey(key)] = adapter

    def get(self, key: ProviderKey | str) -> ProviderAdapter:
        try:
            return self._adapters[ProviderKey(key)]
        except KeyError:
            raise KeyError(f"No adapter registered for provider: {key}") from None

    def keys(self) -> list[ProviderKey]:
        return list(self._adapters)

    def __contains__(self, key: object) -> bool:
        return key in self._adapters

    def __iter__(self) -> Iterator[ProviderKey]:
        return iter(self._adapters)


def default_registry() -> AdapterRegistry:
    """Registry with every built-in provider."""
    return AdapterRegistry({
        ProviderKey.ANTHROPIC: AnthropicAdapter(),
        ProviderKey.GOOGLE_GEMINI: GeminiAdapter(),
        ProviderKey.PERPLEXITY: PerplexityAdapter(),
    })
