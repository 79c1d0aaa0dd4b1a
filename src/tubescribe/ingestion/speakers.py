"""Step 3: Heuristic Host/Guest attribution from what a segment says.

This is a pattern classifier, not diarization: a segment is labelled only
when its wording gives the role away (welcomes, introductions, thanks for
the invitation...). Everything else stays unattributed.
"""

from __future__ import annotations

import re
from typing import Pattern, Sequence, Union

from tubescribe.models.transcript import Segment
from tubescribe.utils.progress import log_step

HOST = "Host"
GUEST = "Guest"

EARLY_SEGMENT_WINDOW = 20

Matcher = Union[str, Pattern[str]]

HOST_PATTERNS: list[Matcher] = [
    # Welcome and introductions
    "welcome back",
    "welcome to",
    "thanks for joining",
    "hey everyone",
    "hi everyone",
    "hello everyone",
    "welcome everyone",
    # Questions and prompts
    "can you tell us",
    "so tell me",
    "let me ask",
    "i wanted to call out",
    "i wanted to ask",
    "before we dive",
    "before we get",
    # Transitions and hosting
    "moving on",
    "that's interesting",
    "this is super interesting",
    "i'm so happy",
    "got it",
    "let's dive in",
    "let's get started",
    "today i have",
    "today we have",
    "i have an absolute",
    "we're going to",
    "so we're going to",
    # Self-introductions
    re.compile(r"^i'm\s+\w+", re.IGNORECASE),
    re.compile(r"^this is\s+\w+", re.IGNORECASE),
    # Show housekeeping
    "this episode is",
    "this episode was",
    "brought to you by",
    "sponsored by",
    # Wrapping up
    "thanks so much",
    "thank you so much",
    "thanks for watching",
    "thanks for listening",
    "see you next time",
    "we're going to wrap",
    "let's wrap up",
]

GUEST_PATTERNS: list[Matcher] = [
    "thanks for having me",
    "thanks for inviting me",
    "thanks for having us",
    "appreciate you having me",
    "great to be here",
    "happy to be here",
    "excited to be here",
    # First-person narrative framing
    "absolutely",
    "what i did",
    "well thanks",
    "i think it's",
    "in my experience",
    "what we found",
    "the way i",
    "yeah i think",
    "i wrote this",
    "so i initially",
    "what we've done",
    "in my company",
    "at my company",
    "we built",
    "i built",
]

# Checked after both lists; all imply the host
CONTEXT_PATTERNS: list[Matcher] = [
    re.compile(r"welcome to\s+[^,.]+(?:podcast|show|episode)", re.IGNORECASE),
    re.compile(r"today (?:i|we) have", re.IGNORECASE),
    re.compile(r"let's (?:dive|get|start)", re.IGNORECASE),
]

# Permissive cues, only trusted within the first EARLY_SEGMENT_WINDOW segments
EARLY_INTRO_PATTERNS: list[Matcher] = [
    "welcome to",
    "hey everyone",
    "hi everyone",
    "hello everyone",
    re.compile(r"^i'm\s+\w+", re.IGNORECASE),
    re.compile(r"^this is\s+\w+", re.IGNORECASE),
    # "podcast" plus any of on/about/how anywhere, as plain substrings
    re.compile(r"^(?=.*podcast)(?=.*(?:on|about|how))", re.IGNORECASE | re.DOTALL),
    "today i have",
    "today we have",
]

# Applied to the whole unattributed opening when nothing else was ever detected
OPENING_FALLBACK_PATTERNS: list[Matcher] = [
    "welcome",
    "hey everyone",
    "podcast",
    re.compile(r"i'm\s+\w+", re.IGNORECASE),
]


def _matches(text: str, lower: str, matcher: Matcher) -> bool:
    if isinstance(matcher, str):
        return matcher in lower
    return matcher.search(text) is not None


def _any_match(text: str, matchers: Sequence[Matcher]) -> bool:
    stripped = text.strip()
    lower = stripped.lower()
    return any(_matches(stripped, lower, m) for m in matchers)


def classify_speaker(
    text: str,
    host_patterns: Sequence[Matcher],
    guest_patterns: Sequence[Matcher],
    context_patterns: Sequence[Matcher] = (),
) -> str | None:
    """Return HOST, GUEST or None. First matching pattern wins."""
    if _any_match(text, host_patterns):
        return HOST
    if _any_match(text, guest_patterns):
        return GUEST
    if _any_match(text, context_patterns):
        return HOST
    return None


def detect_speaker(text: str, index: int | None = None) -> str | None:
    """Classify one segment's text with the default pattern sets.

    ``index`` is the segment's position in the transcript; the permissive
    intro cues only apply to the opening segments.
    """
    speaker = classify_speaker(text, HOST_PATTERNS, GUEST_PATTERNS, CONTEXT_PATTERNS)
    if speaker is None and index is not None and index < EARLY_SEGMENT_WINDOW:
        if _any_match(text, EARLY_INTRO_PATTERNS):
            speaker = HOST
    return speaker


def attribute_speakers(segments: Sequence[Segment]) -> list[Segment]:
    """Label every segment whose wording identifies its speaker.

    Segments before the first detection are held back. If the first
    detected speaker is the host, the held-back opening is the host's
    introduction and is labelled accordingly. If nothing is detected in the
    whole transcript, the opening is still given to the host when it reads
    like a welcome or self-introduction.
    """
    result: list[Segment] = []
    pending: list[Segment] = []
    detected_any = False

    for i, seg in enumerate(segments):
        speaker = detect_speaker(seg.text, i) if seg.text.strip() else None

        if not detected_any:
            if speaker is None:
                pending.append(seg)
                continue
            detected_any = True
            if speaker == HOST:
                pending = [p.model_copy(update={"speaker": HOST}) for p in pending]
            result.extend(pending)
            pending = []

        if speaker is None:
            result.append(seg)
        else:
            result.append(seg.model_copy(update={"speaker": speaker}))

    if pending:
        opening = " ".join(p.text.strip() for p in pending if p.text.strip())
        if opening and _any_match(opening, OPENING_FALLBACK_PATTERNS):
            pending = [p.model_copy(update={"speaker": HOST}) for p in pending]
        result.extend(pending)

    labelled = sum(1 for seg in result if seg.speaker)
    log_step("Speakers", f"Attributed {labelled}/{len(result)} segments")
    return result
