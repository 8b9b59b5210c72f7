"""
Transcript parser: raw model text -> ordered speaker turns.

Single pass over non-blank lines (split on newline only):
- "Speaker <digits>: rest" (any case) at the very start of the line opens a new turn.
  An indented speaker line is not a label; it continues the current turn.
- Any other line continues the most recent turn.
- A line before any speaker line opens a turn under the default label.

Turns are recomputed from the raw text every time; nothing here depends on
display names.
"""
from __future__ import annotations

import re

from speakerscribe.config import get_settings
from speakerscribe.transcript.models import TranscriptionTurn

SPEAKER_LINE_RE = re.compile(r"^speaker (\d+):(.*)$", re.IGNORECASE)
SPEAKER_LABEL_RE = re.compile(r"^speaker (\d+)$", re.IGNORECASE)


def speaker_label(number: str) -> str:
    """Canonical label for a speaker number: "Speaker 3"."""
    return f"Speaker {number}"


def parse_transcript(raw: str | None, default_label: str | None = None) -> list[TranscriptionTurn]:
    """Split raw text into turns in order of appearance. Empty/blank input -> []."""
    if not raw or not raw.strip():
        return []
    label = default_label or get_settings().DEFAULT_SPEAKER_LABEL
    turns: list[TranscriptionTurn] = []
    for raw_line in raw.split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        match = SPEAKER_LINE_RE.match(raw_line)
        if match:
            turns.append(TranscriptionTurn(speaker=speaker_label(match.group(1)), text=match.group(2).strip()))
        elif turns:
            turns[-1].append_line(line)
        else:
            turns.append(TranscriptionTurn(speaker=label, text=line))
    return turns


def _speaker_sort_key(label: str) -> tuple[int, int]:
    # Numbered labels by number; anything else (default label) after them
    match = SPEAKER_LABEL_RE.match(label)
    if match:
        return (0, int(match.group(1)))
    return (1, 0)


def unique_speakers(turns: list[TranscriptionTurn]) -> list[str]:
    """
    Distinct speaker labels, collected in first-seen order then sorted numerically
    ("Speaker 2" before "Speaker 10"). Non-numbered labels keep first-seen order at the end.
    """
    seen: list[str] = []
    for turn in turns:
        if turn.speaker not in seen:
            seen.append(turn.speaker)
    return sorted(seen, key=_speaker_sort_key)
