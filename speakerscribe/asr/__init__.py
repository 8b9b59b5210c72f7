"""ASR: swappable remote transcription clients."""
from .base import TranscriptionClient
from .gemini import GeminiTranscriptionClient

__all__ = [
    "TranscriptionClient",
    "GeminiTranscriptionClient",
]
