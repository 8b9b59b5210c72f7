"""
Transcript sharing.

- ShareTarget: where a transcript goes (e.g. the browser's native share sheet).
- share_transcript(): shares a generated markdown file when the target can take
  files, otherwise the transcript text. A cancelled share is a no-op.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

from speakerscribe.config import get_settings
from speakerscribe.errors import ShareCancelled
from speakerscribe.transcript.export import Names, build_export, render_plain
from speakerscribe.transcript.models import TranscriptionTurn

logger = logging.getLogger(__name__)


@dataclass
class SharePayload:
    """
    What gets handed to a share target.
    kind="file": filename/media_type/text describe a markdown file.
    kind="text": text is the plain transcript; no file.
    """

    kind: Literal["file", "text"]
    title: str
    text: str
    filename: str | None = None
    media_type: str | None = None


class ShareTarget(ABC):
    """Abstract share destination. share() raises ShareCancelled when the user backs out."""

    @abstractmethod
    def can_share_files(self) -> bool:
        ...

    @abstractmethod
    async def share(self, payload: SharePayload) -> None:
        ...


class BrowserShareTarget(ShareTarget):
    """
    Native share in the browser (navigator.share). The server cannot open the share
    sheet itself; it records the payload and the page passes it to navigator.share.
    files_supported comes from the page's navigator.canShare({files}) check.
    """

    def __init__(self, files_supported: bool) -> None:
        self._files_supported = files_supported
        self.delivered: SharePayload | None = None

    def can_share_files(self) -> bool:
        return self._files_supported

    async def share(self, payload: SharePayload) -> None:
        self.delivered = payload


def build_share_payload(
    turns: list[TranscriptionTurn],
    names: Names = None,
    as_file: bool = True,
    source_name: str | None = None,
    title: str | None = None,
) -> SharePayload:
    title = title or get_settings().SHARE_TITLE
    if as_file:
        doc = build_export(turns, names, "md", source_name)
        return SharePayload(
            kind="file",
            title=title,
            text=doc.content,
            filename=doc.filename,
            media_type=doc.media_type,
        )
    return SharePayload(kind="text", title=title, text=render_plain(turns, names))


async def share_transcript(
    target: ShareTarget,
    turns: list[TranscriptionTurn],
    names: Names = None,
    source_name: str | None = None,
    title: str | None = None,
) -> SharePayload | None:
    """
    Share via target: file if supported, else text.
    Returns the payload that was shared, or None if the user cancelled.
    """
    as_file = target.can_share_files()
    if not as_file:
        logger.info("Share target cannot take files; sharing text instead")
    payload = build_share_payload(turns, names, as_file=as_file, source_name=source_name, title=title)
    try:
        await target.share(payload)
    except ShareCancelled:
        logger.debug("Share cancelled by user")
        return None
    return payload
