"""Text cleaning helpers shared by the caption parser and the normalizer."""

from __future__ import annotations

import re

_HTML_TAG = re.compile(r"<[^>]+>")
_BRACKETED = re.compile(r"\[.*?\]")
_PARENTHETICAL = re.compile(r"\(.*?\)")
_WHITESPACE = re.compile(r"\s+")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9\s]")


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def clean_text(text: str) -> str:
    """Strip markup tags, [sound cues] and (asides), then collapse whitespace."""
    text = _HTML_TAG.sub("", text)
    text = _BRACKETED.sub("", text)
    text = _PARENTHETICAL.sub("", text)
    return normalize_whitespace(text)


def normalize_for_comparison(text: str) -> str:
    """Comparison key: alphanumerics only, lowercase, single spaces."""
    return normalize_whitespace(_NON_ALNUM.sub("", text).lower())
