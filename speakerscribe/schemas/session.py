"""
Schemas for the session API.

A session mirrors one page: selected file, state, raw transcript, parsed turns,
speaker list and current display names. The page renders straight from it.
"""
from __future__ import annotations

from pydantic import BaseModel, Field

from speakerscribe.shell import ShellState, TranscriptionShell


class TurnOut(BaseModel):
    """One parsed speaker turn."""

    speaker: str = Field(..., description="Original label, e.g. 'Speaker 1'")
    display_name: str = Field(..., description="Current display name for the speaker")
    text: str


class SessionResponse(BaseModel):
    """Full view of one session."""

    session_id: str
    state: ShellState
    filename: str | None = Field(None, description="Selected audio file, if any")
    is_loading: bool = False
    error: str | None = Field(None, description="User-facing error from the last attempt")
    alert: str | None = Field(None, description="One-off notice, e.g. a rejected file type")
    transcription: str = Field("", description="Raw model output")
    turns: list[TurnOut] = Field(default_factory=list)
    speakers: list[str] = Field(default_factory=list, description="Unique labels, numerically sorted")
    speaker_names: dict[str, str] = Field(default_factory=dict)
    parse_failed: bool = Field(False, description="Raw text present but no turns could be parsed")

    @classmethod
    def from_shell(cls, session_id: str, shell: TranscriptionShell, alert: str | None = None) -> "SessionResponse":
        names = shell.speaker_names
        return cls(
            session_id=session_id,
            state=shell.state,
            filename=shell.audio_file.filename if shell.audio_file else None,
            is_loading=shell.is_loading,
            error=shell.error,
            alert=alert,
            transcription=shell.transcription,
            turns=[
                TurnOut(speaker=t.speaker, display_name=names.display_name(t.speaker), text=t.text)
                for t in shell.turns
            ],
            speakers=list(shell.speakers),
            speaker_names=names.as_dict(),
            parse_failed=shell.parse_failed,
        )


class RenameRequest(BaseModel):
    """Request body for PUT /api/sessions/{id}/speakers/{label}."""

    name: str = Field(..., description="New display name; blank falls back to the label")
