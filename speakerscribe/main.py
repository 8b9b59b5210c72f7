"""
FastAPI app: upload an audio file, transcribe it with speaker labels, rename
speakers, export or share the result.

The bundled page (GET /) drives one session:
  POST /api/sessions                      -> new session (IDLE)
  POST /api/sessions/{id}/file            -> select file (UPLOADING, or alert if rejected)
  POST /api/sessions/{id}/transcribe      -> DONE or ERROR (409 while another request runs)
  PUT  /api/sessions/{id}/speakers/{lbl}  -> rename a speaker
  GET  /api/sessions/{id}/export?format=  -> .txt / .md download
  POST /api/sessions/{id}/share           -> payload for navigator.share
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, File, HTTPException, Request, Response, UploadFile
from fastapi.responses import FileResponse

from speakerscribe.asr.base import TranscriptionClient
from speakerscribe.asr.gemini import GeminiTranscriptionClient
from speakerscribe.audio.receiver import AudioFile
from speakerscribe.errors import FileReadError, TranscriptionBusyError
from speakerscribe.logging_setup import configure_logging
from speakerscribe.schemas.session import RenameRequest, SessionResponse
from speakerscribe.schemas.share import ShareRequest, ShareResponse
from speakerscribe.session_store import clear_sessions, create_session, delete_session, get_session
from speakerscribe.shell import TranscriptionShell
from speakerscribe.transcript.export import build_export
from speakerscribe.transcript.share import BrowserShareTarget, share_transcript

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def get_transcription_client(request: Request) -> TranscriptionClient:
    """Return the single client created in lifespan."""
    client = getattr(request.app.state, "transcription_client", None)
    if client is None:
        raise RuntimeError("App not initialized (lifespan not run?)")
    return client


def _require_session(session_id: str) -> TranscriptionShell:
    shell = get_session(session_id)
    if shell is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return shell


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # One client for the whole app; sessions share it
    app.state.transcription_client = GeminiTranscriptionClient()
    logger.info("Transcription client ready (model=%s)", app.state.transcription_client.model)
    yield
    clear_sessions()
    app.state.transcription_client = None


app = FastAPI(
    title="Speaker Transcription",
    description="Upload audio, get a speaker-labelled transcript from Gemini, rename, export, share",
    lifespan=lifespan,
)


@app.get("/", include_in_schema=False)
async def index() -> FileResponse:
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.post("/api/sessions", response_model=SessionResponse)
async def new_session(request: Request) -> SessionResponse:
    shell = TranscriptionShell(get_transcription_client(request))
    session_id = create_session(shell)
    logger.info("Session created: %s", session_id)
    return SessionResponse.from_shell(session_id, shell)


@app.get("/api/sessions/{session_id}", response_model=SessionResponse)
async def read_session(session_id: str) -> SessionResponse:
    return SessionResponse.from_shell(session_id, _require_session(session_id))


@app.delete("/api/sessions/{session_id}", status_code=204)
async def remove_session(session_id: str) -> Response:
    if not delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=204)


@app.post("/api/sessions/{session_id}/file", response_model=SessionResponse)
async def select_file(session_id: str, file: UploadFile = File(...)) -> SessionResponse:
    """
    Select the audio file for this session. Wrong types are not an HTTP error:
    the response carries an alert and the session is left as it was.
    """
    shell = _require_session(session_id)
    if shell.is_loading:
        raise HTTPException(status_code=409, detail="A transcription is already in progress")
    try:
        audio_file = await AudioFile.from_upload(file)
    except FileReadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    # A transcription may have started while the upload body was being read
    try:
        alert = shell.select_file(audio_file)
    except TranscriptionBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return SessionResponse.from_shell(session_id, shell, alert=alert)


@app.post("/api/sessions/{session_id}/transcribe", response_model=SessionResponse)
async def transcribe(session_id: str) -> SessionResponse:
    """
    Run transcription to completion. Failures come back in the session's error field;
    only a concurrent request is an HTTP error (409).
    """
    shell = _require_session(session_id)
    try:
        await shell.transcribe()
    except TranscriptionBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return SessionResponse.from_shell(session_id, shell)


@app.put("/api/sessions/{session_id}/speakers/{label}", response_model=SessionResponse)
async def rename_speaker(session_id: str, label: str, body: RenameRequest) -> SessionResponse:
    shell = _require_session(session_id)
    try:
        shell.rename_speaker(label, body.name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown speaker: {label}")
    return SessionResponse.from_shell(session_id, shell)


@app.get("/api/sessions/{session_id}/export")
async def export_transcript(session_id: str, format: str = "txt") -> Response:
    """Download the transcript (renames applied) as .txt or .md."""
    shell = _require_session(session_id)
    if not shell.turns:
        raise HTTPException(status_code=400, detail="No transcription to export")
    source_name = shell.audio_file.filename if shell.audio_file else None
    try:
        doc = build_export(shell.turns, shell.speaker_names, format.lower(), source_name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return Response(
        content=doc.content,
        media_type=doc.media_type,
        headers={"Content-Disposition": f'attachment; filename="{doc.filename}"'},
    )


@app.post("/api/sessions/{session_id}/share", response_model=ShareResponse)
async def share(session_id: str, body: ShareRequest) -> ShareResponse:
    """Build the share payload: a markdown file when the browser can share files, else text."""
    shell = _require_session(session_id)
    if not shell.turns:
        raise HTTPException(status_code=400, detail="No transcription to share")
    target = BrowserShareTarget(files_supported=body.files_supported)
    source_name = shell.audio_file.filename if shell.audio_file else None
    payload = await share_transcript(target, shell.turns, shell.speaker_names, source_name, body.title)
    if payload is None:
        return Response(status_code=204)
    return ShareResponse(
        kind=payload.kind,
        title=payload.title,
        text=payload.text,
        filename=payload.filename,
        media_type=payload.media_type,
    )
