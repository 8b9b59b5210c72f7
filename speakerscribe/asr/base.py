"""
TranscriptionClient: abstract interface for a remote speaker-labelling transcriber.

Implementations: GeminiTranscriptionClient (Gemini generateContent REST API).
One request per call; no retries; failures surface as TranscriptionAPIError.
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class TranscriptionClient(ABC):
    """
    Abstract transcription client. Accepts a base64 audio payload and its MIME type,
    returns the model's raw text (lines starting with "Speaker N:").
    """

    @abstractmethod
    async def transcribe(self, base64_audio: str, mime_type: str) -> str:
        """
        Transcribe one audio payload.
        Must raise TranscriptionAPIError on any transport or API failure.
        """
        ...
