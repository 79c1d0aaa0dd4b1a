"""Prompt templates and prompt assembly.

Templates are Markdown documents split into ``#``/``##`` sections. Providers
that take a separate system prompt get the behavioural sections (role,
rules, constraints...) there and everything else, plus the transcript, in
the user message. The others get one combined prompt.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol

from tubescribe.models.summary import PromptParts, SummaryStyle
from tubescribe.utils.progress import log_step, log_warning

PACKAGED_TEMPLATES_DIR = Path(__file__).parent / "prompt_templates"
FALLBACK_TEMPLATE_FILE = "fallback.md"
MAX_TEMPLATE_LENGTH = 50_000

LAST_RESORT_TEMPLATE = (
    "You are an expert analyst. Summarize the following podcast transcript with "
    "actionable insights. Only use information explicitly stated in the transcript."
)

DEFAULT_SYSTEM_PROMPT = (
    "You are an expert analyst who writes accurate summaries of video transcripts."
)

SYSTEM_SECTIONS = frozenset({
    "role",
    "critical rules",
    "context",
    "constraints",
    "quality checklist",
    "final reminder",
})

FINAL_INSTRUCTION = (
    "Summarize the transcript above following all of the instructions. "
    "Use only information stated in the transcript."
)

_HEADING = re.compile(r"^#{1,2}\s+(.+?)\s*#*\s*$")
_HEADING_NOISE = re.compile(r"[^a-z\s]")
_CLOCK = re.compile(r"\[(\d{2}:\d{2}:\d{2})\]")


def normalize_heading(heading: str) -> str:
    return " ".join(_HEADING_NOISE.sub(" ", heading.lower()).split())


def split_sections(template: str) -> list[tuple[str | None, str]]:
    """Split a template into ``(heading, text)`` pairs.

    Text before the first heading comes back with heading None. Each
    section's text includes its own heading line.
    """
    sections: list[tuple[str | None, list[str]]] = [(None, [])]
    for line in template.splitlines():
        match = _HEADING.match(line)
        if match:
            sections.append((match.group(1), [line]))
        else:
            sections[-1][1].append(line)

    return [
        (heading, "\n".join(lines).strip())
        for heading, lines in sections
        if "\n".join(lines).strip()
    ]


def extract_timestamp_range(text: str) -> tuple[str, str] | None:
    """First and last inline ``[HH:MM:SS]`` marker, if any."""
    stamps = _CLOCK.findall(text)
    if not stamps:
        return None
    return stamps[0], stamps[-1]


def coverage_instruction(first: str, last: str) -> str:
    return (
        "## Timestamp Coverage\n\n"
        f"The transcript runs from [{first}] to [{last}]. Your output must cover "
        f"the entire range, from the opening through [{last}], with timestamps in "
        "ascending order. Do not stop after the first part of the transcript."
    )


def _with_video_url(template: str, style: SummaryStyle, video_url: str | None) -> str:
    template = template.strip()
    if style is SummaryStyle.BULLETS and video_url:
        template += f"\n\n## Video URL\n\nUse this exact URL for all timestamp links: {video_url}"
    return template


def _coverage(transcript: str) -> str | None:
    time_range = extract_timestamp_range(transcript)
    return coverage_instruction(*time_range) if time_range else None


def build_combined_prompt(
    template: str,
    transcript: str,
    style: SummaryStyle | str = SummaryStyle.BULLETS,
    video_url: str | None = None,
) -> str:
    """Template, transcript and (when timestamped) a coverage instruction."""
    parts = [
        _with_video_url(template, SummaryStyle(style), video_url),
        f"## Transcript\n\n{transcript}",
        FINAL_INSTRUCTION,
    ]
    coverage = _coverage(transcript)
    if coverage:
        parts.append(coverage)
    return "\n\n".join(parts)


def build_prompt_parts(
    template: str,
    transcript: str,
    style: SummaryStyle | str = SummaryStyle.BULLETS,
    video_url: str | None = None,
) -> PromptParts:
    """Behavioural sections to the system prompt, everything else to the user message.

    Text before the first heading counts as behavioural.
    """
    template = _with_video_url(template, SummaryStyle(style), video_url)

    system: list[str] = []
    task: list[str] = []
    for heading, text in split_sections(template):
        if heading is None or normalize_heading(heading) in SYSTEM_SECTIONS:
            system.append(text)
        else:
            task.append(text)

    task.append(f"## Transcript\n\n{transcript}")
    task.append(FINAL_INSTRUCTION)
    coverage = _coverage(transcript)
    if coverage:
        task.append(coverage)

    return PromptParts(
        system_prompt="\n\n".join(system) or DEFAULT_SYSTEM_PROMPT,
        user_message="\n\n".join(task),
    )


def build_prompt(
    template: str,
    transcript: str,
    style: SummaryStyle | str = SummaryStyle.BULLETS,
    video_url: str | None = None,
    *,
    separate_system: bool = False,
) -> str | PromptParts:
    """Combine template and transcript into a provider-ready prompt.

    Returns a single string, or PromptParts when ``separate_system`` is set.
    If the transcript carries ``[HH:MM:SS]`` markers, an instruction to cover
    the full time range is appended to the task content.
    """
    if separate_system:
        return build_prompt_parts(template, transcript, style, video_url)
    return build_combined_prompt(template, transcript, style, video_url)


class TemplateSource(Protocol):
    """Anything that can hand out a prompt template for a style."""

    def load(self, style: SummaryStyle) -> str: ...


class FileTemplateSource:
    """Loads ``<style>.md`` from an override directory, then the packaged set.

    Falls back to ``fallback.md`` and finally to a built-in one-line prompt,
    so loading never fails.
    """

    def __init__(self, prompts_dir: Path | str | None = None):
        self.search_dirs = [Path(prompts_dir)] if prompts_dir else []
        self.search_dirs.append(PACKAGED_TEMPLATES_DIR)

    def _read(self, filename: str) -> str | None:
        for directory in self.search_dirs:
            path = directory / filename
            if not path.is_file():
                continue
            try:
                content = path.read_text(encoding="utf-8").strip()
            except (OSError, UnicodeDecodeError) as e:
                log_warning(f"Skipping unreadable prompt template {path}: {e}")
                continue
            if len(content) > MAX_TEMPLATE_LENGTH:
                log_warning(f"Ignoring oversized prompt template: {path}")
                continue
            if content:
                return content
        return None

    def load(self, style: SummaryStyle) -> str:
        style = SummaryStyle(style)
        template = self._read(f"{style.value}.md")
        if template is not None:
            log_step("Prompt", f"Loaded '{style.value}' template ({len(template)} chars)")
            return template

        log_warning(f"No '{style.value}' template found, using fallback")
        return self._read(FALLBACK_TEMPLATE_FILE) or LAST_RESORT_TEMPLATE
