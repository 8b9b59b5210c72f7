"""
AudioFile and upload acceptance.

- Holds one user-selected file in memory (name, MIME type, bytes).
- Upload filter: MIME type audio/mp4 or filename suffix .m4a (configurable).
- Reading is async so an in-memory file and an uploaded file look the same to the encoder.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from speakerscribe.config import get_settings
from speakerscribe.errors import FileReadError, InvalidFileType

logger = logging.getLogger(__name__)


class ReadableFile(Protocol):
    """Anything with an async read(); FastAPI's UploadFile qualifies."""

    filename: str | None
    content_type: str | None

    async def read(self) -> bytes: ...


@dataclass
class AudioFile:
    """A selected audio file, held in memory until transcription."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    async def read(self) -> bytes:
        return self.data

    @classmethod
    async def from_upload(cls, upload: ReadableFile) -> "AudioFile":
        """Read an uploaded file fully. Raises FileReadError if the upload cannot be read."""
        try:
            data = await upload.read()
        except (OSError, ValueError) as e:
            raise FileReadError(f"Could not read uploaded file: {e}") from e
        return cls(
            filename=upload.filename or "",
            content_type=upload.content_type or "",
            data=data or b"",
        )


def is_accepted_audio(filename: str | None, content_type: str | None) -> bool:
    """True when the MIME type is accepted or the filename ends with an accepted suffix."""
    settings = get_settings()
    mime = (content_type or "").split(";")[0].strip().lower()
    if mime and mime in settings.accepted_mime_types:
        return True
    name = (filename or "").lower()
    return any(name.endswith(ext) for ext in settings.accepted_extensions)


def ensure_accepted_audio(filename: str | None, content_type: str | None) -> None:
    """Raise InvalidFileType for anything is_accepted_audio() rejects."""
    if not is_accepted_audio(filename, content_type):
        logger.info("Rejected upload %r (%s)", filename, content_type)
        raise InvalidFileType(filename, content_type)
