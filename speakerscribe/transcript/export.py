"""
Transcript export: turns + display names -> downloadable text.

Two formats, one turn per block, blocks separated by a blank line:
- txt: "Name: text"
- md:  "**Name:** text"
Names come from the rename store; missing or blank names fall back to the label.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Literal, Mapping, Union

from speakerscribe.config import get_settings
from speakerscribe.transcript.models import TranscriptionTurn
from speakerscribe.transcript.speakers import SpeakerNameMap

logger = logging.getLogger(__name__)

ExportFormat = Literal["txt", "md"]
Names = Union[SpeakerNameMap, Mapping[str, str], None]

MEDIA_TYPES: dict[str, str] = {
    "txt": "text/plain; charset=utf-8",
    "md": "text/markdown; charset=utf-8",
}

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass
class ExportDocument:
    """Rendered transcript ready to be saved or shared."""

    filename: str
    media_type: str
    content: str

    @property
    def content_bytes(self) -> bytes:
        return self.content.encode("utf-8")


def _display_name(names: Names, label: str) -> str:
    if names is None:
        return label
    if isinstance(names, SpeakerNameMap):
        return names.display_name(label)
    name = names.get(label) or ""
    return name if name.strip() else label


def _format_turn_line(turn: TranscriptionTurn, names: Names, markdown: bool) -> str:
    name = _display_name(names, turn.speaker)
    if markdown:
        return f"**{name}:** {turn.text}"
    return f"{name}: {turn.text}"


def render_plain(turns: list[TranscriptionTurn], names: Names = None) -> str:
    return "\n\n".join(_format_turn_line(t, names, markdown=False) for t in turns)


def render_markdown(turns: list[TranscriptionTurn], names: Names = None) -> str:
    return "\n\n".join(_format_turn_line(t, names, markdown=True) for t in turns)


def export_filename(source_name: str | None, fmt: ExportFormat) -> str:
    """<audio stem>_transcription.<fmt>, or the configured basename when there is no source name."""
    basename = get_settings().EXPORT_BASENAME
    stem = os.path.splitext(os.path.basename(source_name or ""))[0]
    stem = _UNSAFE_FILENAME_CHARS.sub("_", stem).strip("._")
    if stem:
        return f"{stem}_{basename}.{fmt}"
    return f"{basename}.{fmt}"


def build_export(
    turns: list[TranscriptionTurn],
    names: Names = None,
    fmt: ExportFormat = "txt",
    source_name: str | None = None,
) -> ExportDocument:
    """Render turns in the requested format. Raises ValueError for unknown formats."""
    if fmt == "txt":
        content = render_plain(turns, names)
    elif fmt == "md":
        content = render_markdown(turns, names)
    else:
        raise ValueError(f"Unsupported export format: {fmt!r} (use txt or md)")
    doc = ExportDocument(
        filename=export_filename(source_name, fmt),
        media_type=MEDIA_TYPES[fmt],
        content=content,
    )
    logger.debug("Export built: %s (%d turns, %d chars)", doc.filename, len(turns), len(content))
    return doc
