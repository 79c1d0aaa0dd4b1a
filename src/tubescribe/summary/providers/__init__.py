"""LLM provider adapters."""

from tubescribe.summary.providers.anthropic import AnthropicAdapter
from tubescribe.summary.providers.base import ProviderAdapter
from tubescribe.summary.providers.gemini import GeminiAdapter
from tubescribe.summary.providers.perplexity import PerplexityAdapter
from tubescribe.summary.providers.registry import AdapterRegistry, default_registry

__all__ = [
    "AdapterRegistry",
    "AnthropicAdapter",
    "GeminiAdapter",
    "PerplexityAdapter",
    "ProviderAdapter",
    "default_registry",
]
