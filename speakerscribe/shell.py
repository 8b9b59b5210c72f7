"""
TranscriptionShell: orchestrates upload -> transcribe -> display for one user.

States:
  IDLE         nothing selected
  UPLOADING    file chosen, not yet sent
  TRANSCRIBING request in flight (one at a time; everything else refused)
  DONE         transcript available
  ERROR        last attempt failed; message in .error

Derived state (turns, speakers) is recomputed whenever the raw transcript
changes; speaker names reset when the derived speaker set changes.
Every error on the transcription path is caught here and turned into a
single user-facing message. Nothing is retried.
"""
from __future__ import annotations

import enum
import logging

from speakerscribe.asr.base import TranscriptionClient
from speakerscribe.audio.encoder import file_to_base64
from speakerscribe.audio.receiver import AudioFile, ensure_accepted_audio
from speakerscribe.errors import InvalidFileType, TranscriptionBusyError
from speakerscribe.transcript.models import TranscriptionTurn
from speakerscribe.transcript.parser import parse_transcript, unique_speakers
from speakerscribe.transcript.speakers import SpeakerNameMap

logger = logging.getLogger(__name__)

NO_FILE_MESSAGE = "Please select an audio file first."
INVALID_FILE_MESSAGE = "Please select a valid .m4a audio file."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."
# Sent when the browser gave no MIME type (accepted by .m4a suffix)
FALLBACK_MIME_TYPE = "audio/mp4"


class ShellState(str, enum.Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    TRANSCRIBING = "transcribing"
    DONE = "done"
    ERROR = "error"


class TranscriptionShell:
    """State for one browser session. Not shared between sessions."""

    def __init__(self, client: TranscriptionClient) -> None:
        self._client = client
        self.state = ShellState.IDLE
        self.audio_file: AudioFile | None = None
        self.error: str | None = None
        self._transcription = ""
        self._turns: list[TranscriptionTurn] = []
        self._speakers: list[str] = []
        self.speaker_names = SpeakerNameMap()

    # --- derived transcript state ---

    @property
    def transcription(self) -> str:
        return self._transcription

    @property
    def turns(self) -> list[TranscriptionTurn]:
        return self._turns

    @property
    def speakers(self) -> list[str]:
        return self._speakers

    @property
    def is_loading(self) -> bool:
        return self.state is ShellState.TRANSCRIBING

    @property
    def parse_failed(self) -> bool:
        """Raw text present but nothing parsed; the page falls back to showing raw text."""
        return bool(self._transcription) and not self._turns

    def set_transcription(self, raw: str) -> None:
        """Replace the raw transcript and re-derive turns, speakers and (if needed) names."""
        self._transcription = raw or ""
        self._turns = parse_transcript(self._transcription)
        self._speakers = unique_speakers(self._turns)
        self.speaker_names.sync(self._speakers)

    # --- user actions ---

    def select_file(self, audio_file: AudioFile | None) -> str | None:
        """
        Choose a file. Returns an alert message when the file is rejected; state is then
        unchanged and nothing is encoded or sent. A valid file clears any previous result.
        """
        if self.is_loading:
            raise TranscriptionBusyError("Cannot change file while a transcription is running")
        if audio_file is None:
            return None
        try:
            ensure_accepted_audio(audio_file.filename, audio_file.content_type)
        except InvalidFileType:
            return INVALID_FILE_MESSAGE
        self.audio_file = audio_file
        self.error = None
        self.set_transcription("")
        self.state = ShellState.UPLOADING
        logger.info("File selected: %s (%s, %d bytes)", audio_file.filename, audio_file.content_type, audio_file.size)
        return None

    def rename_speaker(self, original_label: str, new_name: str) -> None:
        """Change the display name of a speaker. Raises KeyError for labels not in the transcript."""
        if original_label not in self.speaker_names:
            raise KeyError(original_label)
        self.speaker_names.rename(original_label, new_name)

    async def transcribe(self) -> None:
        """
        Encode the selected file and send it. Ends in DONE or ERROR.
        Raises TranscriptionBusyError if a request is already in flight.
        """
        if self.is_loading:
            raise TranscriptionBusyError("A transcription is already in progress")
        if self.audio_file is None:
            self.error = NO_FILE_MESSAGE
            return

        self.state = ShellState.TRANSCRIBING
        self.error = None
        self.set_transcription("")
        audio_file = self.audio_file
        try:
            base64_audio = await file_to_base64(audio_file)
            result = await self._client.transcribe(base64_audio, audio_file.content_type or FALLBACK_MIME_TYPE)
        except Exception as e:
            message = str(e) or UNKNOWN_ERROR_MESSAGE
            self.error = f"Failed to transcribe audio: {message}"
            self.state = ShellState.ERROR
            logger.exception("Transcription failed for %s", audio_file.filename)
            return
        self.set_transcription(result)
        self.state = ShellState.DONE
        logger.info(
            "Transcription done for %s: %d turns, %d speakers",
            audio_file.filename,
            len(self._turns),
            len(self._speakers),
        )
