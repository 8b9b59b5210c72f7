"""
Speaker turn structure for the transcript pipeline.

Each turn has:
- speaker: label from the model output ("Speaker 1", "Speaker 2", ...) or the
  default label for text seen before any speaker line
- text: one or more source lines joined by "\n"

Labels are whatever the model assigned; they do not identify real people.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass
class TranscriptionTurn:
    """One contiguous block of speech attributed to a single speaker label."""

    speaker: str
    text: str

    def append_line(self, line: str) -> None:
        """Continuation line: join onto this turn with a newline."""
        self.text = f"{self.text}\n{line}"

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
