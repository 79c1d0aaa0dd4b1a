"""Checks applied to provider responses before they count as a success."""

from __future__ import annotations

import re
from typing import Pattern, Sequence

import httpx

from tubescribe.errors import (
    AuthError,
    IncompleteResponseError,
    RateLimitError,
    RefusalError,
    StructuralValidationError,
    TransientProviderError,
)
from tubescribe.models.config import ProviderConfig
from tubescribe.utils.progress import log_warning

MIN_SUMMARY_LENGTH = 50

REFUSAL_PATTERNS: list[Pattern[str]] = [
    re.compile(r"you haven't.*provided.*transcript", re.IGNORECASE),
    re.compile(r"I need.*transcript", re.IGNORECASE),
    re.compile(r"please (share|provide).*transcript", re.IGNORECASE),
    re.compile(r"I appreciate your.*setup.*but", re.IGNORECASE),
    re.compile(r"I don't have.*transcript", re.IGNORECASE),
    re.compile(r"no transcript.*provided", re.IGNORECASE),
]

TECHNICAL_SECTIONS: list[Pattern[str]] = [
    re.compile(r"###?\s*1\.\s*Tools", re.IGNORECASE),
    re.compile(r"###?\s*2\.\s*Workflows", re.IGNORECASE),
]


def _preview(content: str) -> str:
    return content[:200].replace("\n", " ")


def validate_output(content: str, provider_name: str) -> None:
    """Reject refusals and suspiciously short output (both retryable)."""
    if any(pattern.search(content) for pattern in REFUSAL_PATTERNS):
        log_warning(f"{provider_name} returned a refusal: {_preview(content)!r}")
        raise RefusalError(f"{provider_name} did not process the transcript. Please try again.")

    if len(content.strip()) < MIN_SUMMARY_LENGTH:
        log_warning(f"{provider_name} returned only {len(content.strip())} chars")
        raise IncompleteResponseError(f"{provider_name} returned an incomplete response.")


def require_sections(content: str, patterns: Sequence[Pattern[str]], provider_name: str) -> None:
    """Every pattern must match somewhere in the content."""
    missing = [p.pattern for p in patterns if not p.search(content)]
    if missing:
        log_warning(f"{provider_name} summary is missing sections: {', '.join(missing)}")
        raise StructuralValidationError(
            f"{provider_name} returned an incomplete summary (missing sections)."
        )


def raise_for_status(response: httpx.Response, provider_name: str, config: ProviderConfig) -> None:
    """Map non-2xx responses to the provider error taxonomy."""
    status = response.status_code
    if 200 <= status < 300:
        return

    if status == 429:
        raise RateLimitError(
            f"{provider_name} rate limit exceeded. Please wait a moment and try again.",
            status=status,
        )
    if status in (401, 403):
        raise AuthError(
            f"Invalid {provider_name} API key. Check {config.api_key_env}.",
            status=status,
        )

    detail = response.text[:200].strip()
    message = f"{provider_name} API error: {status} {response.reason_phrase}".rstrip()
    if detail:
        message += f" - {detail}"
    raise TransientProviderError(message, status=status)
