"""Tests for response validation and HTTP status mapping."""

import httpx
import pytest

from tubescribe.config import provider_config
from tubescribe.errors import (
    AuthError,
    IncompleteResponseError,
    RateLimitError,
    RefusalError,
    StructuralValidationError,
    TransientProviderError,
)
from tubescribe.models.summary import ProviderKey
from tubescribe.summary.validation import (
    TECHNICAL_SECTIONS,
    raise_for_status,
    require_sections,
    validate_output,
)

ANTHROPIC = provider_config(ProviderKey.ANTHROPIC)


class TestValidateOutput:
    @pytest.mark.parametrize("content", [
        "I need the transcript before I can write a summary for you.",
        "Please provide the transcript so I can get started on the summary.",
        "It looks like no transcript was provided in your message to me.",
    ])
    def test_refusals(self, content):
        with pytest.raises(RefusalError):
            validate_output(content, "Gemini")

    def test_too_short(self):
        with pytest.raises(IncompleteResponseError):
            validate_output("  Short.  ", "Gemini")

    def test_valid(self, summary_text):
        validate_output(summary_text, "Gemini")

    def test_errors_are_transient(self):
        assert issubclass(RefusalError, TransientProviderError)
        assert issubclass(IncompleteResponseError, TransientProviderError)
        assert issubclass(StructuralValidationError, TransientProviderError)
        assert not issubclass(AuthError, TransientProviderError)


class TestRequireSections:
    def test_missing(self):
        with pytest.raises(StructuralValidationError):
            require_sections("### 1. Tools\n- git", TECHNICAL_SECTIONS, "Perplexity")

    def test_present(self):
        require_sections("## 1. Tools\n- git\n\n### 2. Workflows\n- review", TECHNICAL_SECTIONS, "Perplexity")


class TestRaiseForStatus:
    def test_success(self):
        raise_for_status(httpx.Response(200, json={}), "Anthropic", ANTHROPIC)

    def test_rate_limit(self):
        with pytest.raises(RateLimitError) as exc_info:
            raise_for_status(httpx.Response(429), "Anthropic", ANTHROPIC)
        assert exc_info.value.status == 429

    @pytest.mark.parametrize("status", [401, 403])
    def test_auth(self, status):
        with pytest.raises(AuthError, match="ANTHROPIC_API_KEY"):
            raise_for_status(httpx.Response(status), "Anthropic", ANTHROPIC)

    def test_other_errors_transient(self):
        with pytest.raises(TransientProviderError) as exc_info:
            raise_for_status(httpx.Response(503, text="overloaded"), "Anthropic", ANTHROPIC)
        assert exc_info.value.status == 503
        assert "503" in str(exc_info.value)
        assert "overloaded" in str(exc_info.value)
