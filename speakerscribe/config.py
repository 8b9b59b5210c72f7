"""Application configuration. Loads from env vars."""
from pydantic_settings import BaseSettings


DEFAULT_PROMPT = (
    "Transcribe the following audio conversation. Identify each speaker and label them as "
    "'Speaker 1', 'Speaker 2', etc. Provide the transcription in a clear, sequential format "
    "where each line starts with the speaker's label followed by a colon."
)


class Settings(BaseSettings):
    """App settings. Override via environment variables."""

    # Gemini (generateContent REST API). Key is required for transcription.
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-pro"
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
    TRANSCRIBE_PROMPT: str = DEFAULT_PROMPT
    # None = wait for the model as long as it takes (no client-side timeout)
    TRANSCRIBE_TIMEOUT_SECONDS: float | None = None

    # Upload filter. Comma-separated; a file passes on either MIME type or suffix.
    ACCEPTED_MIME_TYPES: str = "audio/mp4"
    ACCEPTED_EXTENSIONS: str = ".m4a"

    # Label for text that precedes any "Speaker N:" line
    DEFAULT_SPEAKER_LABEL: str = "Transcription"

    # Export / share
    EXPORT_BASENAME: str = "transcription"
    SHARE_TITLE: str = "Audio Transcription"

    # Logging: level (DEBUG, INFO, WARNING, ERROR); file path = also log to file (empty = console only).
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def accepted_mime_types(self) -> list[str]:
        return [m.strip().lower() for m in self.ACCEPTED_MIME_TYPES.split(",") if m.strip()]

    @property
    def accepted_extensions(self) -> list[str]:
        return [e.strip().lower() for e in self.ACCEPTED_EXTENSIONS.split(",") if e.strip()]


def get_settings() -> Settings:
    return Settings()
