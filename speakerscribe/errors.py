"""
Error taxonomy for the transcription path.

- FileReadError: upload could not be read or encoded.
- InvalidFileType: not an accepted audio file; the shell turns it into an alert.
- TranscriptionAPIError: network or service failure talking to the model.
- ShareCancelled: user dismissed the share sheet; callers treat it as a no-op.
- TranscriptionBusyError: a request is already in flight for this session.
"""
from __future__ import annotations


class SpeakerScribeError(Exception):
    """Base class for errors raised by this package."""


class FileReadError(SpeakerScribeError):
    pass


class InvalidFileType(SpeakerScribeError):
    def __init__(self, filename: str | None, content_type: str | None) -> None:
        self.filename = filename or ""
        self.content_type = content_type or ""
        super().__init__(f"Unsupported file '{self.filename}' ({self.content_type or 'unknown type'})")


class TranscriptionAPIError(SpeakerScribeError):
    pass


class ShareCancelled(SpeakerScribeError):
    pass


class TranscriptionBusyError(SpeakerScribeError):
    pass
