"""
In-memory speaker rename store.

Maps original labels ("Speaker 1") to the display names a user typed in.
Renames never touch the turns themselves; they are applied at render time.
"""
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class SpeakerNameMap:
    """
    label -> display name. Starts as identity for the given speakers.
    reset() restores identity whenever the set of speakers changes.
    """

    def __init__(self, speakers: list[str] | None = None) -> None:
        self._speakers: list[str] = []
        self._names: dict[str, str] = {}
        self.reset(speakers or [])

    def reset(self, speakers: list[str]) -> None:
        self._speakers = list(speakers)
        self._names = {label: label for label in self._speakers}

    def sync(self, speakers: list[str]) -> bool:
        """Reset only if the speaker set differs from the current one. Returns True if reset."""
        if list(speakers) == self._speakers:
            return False
        logger.debug("Speaker set changed %s -> %s; resetting names", self._speakers, speakers)
        self.reset(speakers)
        return True

    def rename(self, original_label: str, new_name: str) -> None:
        """Overwrite the display name for one label."""
        self._names[original_label] = new_name

    def display_name(self, label: str) -> str:
        """Current display name; blank or missing names fall back to the label."""
        name = self._names.get(label, "")
        return name if name.strip() else label

    def __contains__(self, label: object) -> bool:
        return label in self._names

    @property
    def speakers(self) -> list[str]:
        return list(self._speakers)

    def as_dict(self) -> dict[str, str]:
        return dict(self._names)
