"""Exception hierarchy for tubescribe."""

from __future__ import annotations


class TubescribeError(Exception):
    """Base class for all tubescribe errors."""


class CaptionParseError(TubescribeError):
    """A caption block (or one of its timestamps) could not be parsed.

    Raised by the low-level timestamp parser and absorbed by the caption
    parser, which drops the offending block and keeps going.
    """


class ConfigurationError(TubescribeError):
    """Required configuration is missing or invalid. Never retried."""


class ProviderError(TubescribeError):
    """Base class for failures talking to an LLM provider."""

    def __init__(self, message: str, *, provider: str | None = None, status: int | None = None):
        super().__init__(message)
        self.provider = provider
        self.status = status


class TransientProviderError(ProviderError):
    """Failure worth retrying: network, timeout, 5xx, unusable output."""


class RateLimitError(TransientProviderError):
    """Provider answered 429."""


class RefusalError(TransientProviderError):
    """Provider returned a refusal instead of a summary."""


class IncompleteResponseError(TransientProviderError):
    """Provider returned suspiciously short output."""


class StructuralValidationError(TransientProviderError):
    """Provider output is missing required sections."""


class AuthError(ProviderError):
    """Provider rejected the API key (401/403). Never retried."""
