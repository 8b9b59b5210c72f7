"""Speaker-labelled audio transcription service backed by Gemini."""

__version__ = "0.1.0"
