"""
File encoder: selected file -> base64 payload for the model request.

The file is rendered as a data URL ("data:audio/mp4;base64,....") and only the
part after the comma is returned, which is what the inline-data API expects.
"""
from __future__ import annotations

import base64

from speakerscribe.audio.receiver import ReadableFile
from speakerscribe.errors import FileReadError

DEFAULT_MIME_TYPE = "application/octet-stream"


def to_data_url(data: bytes, mime_type: str | None = None) -> str:
    """Build a base64 data URL for raw bytes."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{encoded}"


async def file_to_base64(file: ReadableFile) -> str:
    """
    Read file and return its base64 payload with the data-URL prefix stripped.
    Raises FileReadError when the file cannot be read or the payload is empty.
    """
    try:
        data = await file.read()
    except (OSError, ValueError) as e:
        raise FileReadError(f"File could not be read as a data URL: {e}") from e
    if not isinstance(data, (bytes, bytearray)):
        raise FileReadError("File could not be read as a data URL.")
    data_url = to_data_url(bytes(data), file.content_type)
    _, _, payload = data_url.partition(",")
    if not payload:
        raise FileReadError("Could not extract base64 string from file.")
    return payload
