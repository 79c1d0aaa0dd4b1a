"""Shared fixtures for the tubescribe test suite."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from tubescribe.config import Settings
from tubescribe.models.config import LLMConfig
from tubescribe.models.summary import SummaryStyle

SAMPLE_SRT = """1
00:00:01,000 --> 00:00:04,000
Welcome to the show, I'm Claire.

2
00:00:04,500 --> 00:00:08,000
Today we have a great guest.

3
00:00:08,000 --> 00:00:12,250
Thanks for having me, it's great to be here.
"""

SUMMARY_TEXT = "## Key Takeaways\n\n" + "\n".join(
    f"- [00:00:{i:02d}] Insight number {i} about building the product" for i in range(1, 30)
)

ANTHROPIC_HOST = "api.anthropic.com"
GEMINI_HOST = "generativelanguage.googleapis.com"
PERPLEXITY_HOST = "api.perplexity.ai"


class StaticTemplates:
    """Template source returning one fixed template and counting loads."""

    def __init__(self, template: str = "## Role\nYou are an analyst.\n\n## Output Format\nUse bullets."):
        self.template = template
        self.loads: list[SummaryStyle] = []

    def load(self, style: SummaryStyle) -> str:
        self.loads.append(style)
        return self.template


def success_payload(host: str, text: str = SUMMARY_TEXT) -> dict:
    """Provider-shaped JSON body carrying ``text``."""
    if host == ANTHROPIC_HOST:
        return {"content": [{"type": "text", "text": text}]}
    if host == GEMINI_HOST:
        return {"candidates": [{"content": {"parts": [{"text": text}]}}]}
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


@pytest.fixture
def sample_srt() -> str:
    return SAMPLE_SRT


@pytest.fixture
def summary_text() -> str:
    return SUMMARY_TEXT


@pytest.fixture
def settings() -> Settings:
    return Settings(values={
        "ANTHROPIC_API_KEY": "sk-ant-test",
        "GOOGLE_GEMINI_API_KEY": "gemini-test",
        "PERPLEXITY_API_KEY": "pplx-test",
    })


@pytest.fixture
def llm() -> LLMConfig:
    return LLMConfig(max_retries=3, initial_retry_delay=1.0, request_timeout=5.0)


@pytest.fixture
def templates() -> StaticTemplates:
    return StaticTemplates()


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def fake_sleep(sleeps: list[float]) -> Callable:
    async def _sleep(delay: float) -> None:
        sleeps.append(delay)

    return _sleep


@pytest.fixture
def calls() -> list[httpx.Request]:
    return []


@pytest.fixture
def mock_client(calls: list[httpx.Request]) -> Callable[..., httpx.AsyncClient]:
    """Build an AsyncClient whose transport records requests and defers to ``handler``."""

    def _build(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        def record(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(record))

    return _build
