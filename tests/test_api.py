"""End-to-end tests for the session HTTP API with a scripted transcription client."""

import pytest
from fastapi import HTTPException

from speakerscribe import main, session_store
from speakerscribe.errors import TranscriptionAPIError
from speakerscribe.shell import ShellState, TranscriptionShell


def _new_session(api) -> str:
    response = api.post("/api/sessions")
    assert response.status_code == 200
    assert response.json()["state"] == "idle"
    return response.json()["session_id"]


def _upload(api, session_id: str, name: str = "meeting.m4a", content_type: str = "audio/mp4", data: bytes = b"abc"):
    return api.post(f"/api/sessions/{session_id}/file", files={"file": (name, data, content_type)})


def test_health_and_index(api):
    assert api.get("/health").json() == {"status": "ok"}
    page = api.get("/")
    assert page.status_code == 200
    assert "Audio Transcription" in page.text


def test_full_flow_upload_transcribe_rename_export(api, fake_client):
    session_id = _new_session(api)

    uploaded = _upload(api, session_id)
    assert uploaded.status_code == 200
    assert uploaded.json()["state"] == "uploading"
    assert uploaded.json()["filename"] == "meeting.m4a"
    assert uploaded.json()["alert"] is None

    done = api.post(f"/api/sessions/{session_id}/transcribe").json()
    assert done["state"] == "done"
    assert [t["speaker"] for t in done["turns"]] == ["Speaker 1", "Speaker 2", "Speaker 1"]
    assert done["speakers"] == ["Speaker 1", "Speaker 2"]
    assert fake_client.calls == [("YWJj", "audio/mp4")]

    renamed = api.put(f"/api/sessions/{session_id}/speakers/Speaker 1", json={"name": "Alice"}).json()
    assert renamed["speaker_names"]["Speaker 1"] == "Alice"
    assert [t["display_name"] for t in renamed["turns"]] == ["Alice", "Speaker 2", "Alice"]
    assert [t["speaker"] for t in renamed["turns"]] == ["Speaker 1", "Speaker 2", "Speaker 1"]

    txt = api.get(f"/api/sessions/{session_id}/export", params={"format": "txt"})
    assert txt.status_code == 200
    assert txt.headers["Content-Disposition"] == 'attachment; filename="meeting_transcription.txt"'
    assert txt.text == "Alice: Hi\n\nSpeaker 2: Hello\n\nAlice: Bye"

    md = api.get(f"/api/sessions/{session_id}/export", params={"format": "md"})
    assert md.headers["Content-Disposition"].endswith('.md"')
    assert md.text.startswith("**Alice:** Hi")


def test_wrong_file_type_returns_alert_without_transcribing(api, fake_client):
    session_id = _new_session(api)

    response = _upload(api, session_id, name="song.mp3", content_type="audio/mpeg")

    assert response.status_code == 200
    body = response.json()
    assert body["alert"] == "Please select a valid .m4a audio file."
    assert body["state"] == "idle"
    assert body["filename"] is None
    assert fake_client.calls == []


def test_transcribe_without_file_reports_error(api, fake_client):
    session_id = _new_session(api)

    body = api.post(f"/api/sessions/{session_id}/transcribe").json()

    assert body["error"] == "Please select an audio file first."
    assert fake_client.calls == []


def test_api_failure_shows_in_error_field(api, fake_client):
    fake_client.error = TranscriptionAPIError("Gemini API call failed: quota exceeded")
    session_id = _new_session(api)
    _upload(api, session_id)

    body = api.post(f"/api/sessions/{session_id}/transcribe").json()

    assert body["state"] == "error"
    assert body["error"] == "Failed to transcribe audio: Gemini API call failed: quota exceeded"
    assert body["turns"] == []


def test_unparseable_text_flags_parse_failed(api, fake_client):
    fake_client.result = "   \n\n"
    session_id = _new_session(api)
    _upload(api, session_id)

    body = api.post(f"/api/sessions/{session_id}/transcribe").json()

    assert body["parse_failed"] is True
    assert body["turns"] == []


def test_rename_unknown_speaker_is_404(api):
    session_id = _new_session(api)
    _upload(api, session_id)
    api.post(f"/api/sessions/{session_id}/transcribe")

    response = api.put(f"/api/sessions/{session_id}/speakers/Speaker 9", json={"name": "Nobody"})

    assert response.status_code == 404


def test_export_errors(api):
    session_id = _new_session(api)

    assert api.get(f"/api/sessions/{session_id}/export").status_code == 400

    _upload(api, session_id)
    api.post(f"/api/sessions/{session_id}/transcribe")
    response = api.get(f"/api/sessions/{session_id}/export", params={"format": "pdf"})
    assert response.status_code == 400
    assert "Unsupported export format" in response.json()["detail"]


def test_share_file_and_text_payloads(api):
    session_id = _new_session(api)
    _upload(api, session_id)
    api.post(f"/api/sessions/{session_id}/transcribe")

    as_file = api.post(f"/api/sessions/{session_id}/share", json={"files_supported": True}).json()
    assert as_file["kind"] == "file"
    assert as_file["filename"] == "meeting_transcription.md"
    assert as_file["text"].startswith("**Speaker 1:** Hi")

    as_text = api.post(f"/api/sessions/{session_id}/share", json={"files_supported": False}).json()
    assert as_text["kind"] == "text"
    assert as_text["filename"] is None
    assert as_text["text"].startswith("Speaker 1: Hi")


def test_share_without_transcript_is_400(api):
    session_id = _new_session(api)

    assert api.post(f"/api/sessions/{session_id}/share", json={}).status_code == 400


def test_unknown_session_is_404(api):
    assert api.get("/api/sessions/missing").status_code == 404
    assert api.post("/api/sessions/missing/transcribe").status_code == 404


def test_delete_session(api):
    session_id = _new_session(api)

    assert api.delete(f"/api/sessions/{session_id}").status_code == 204
    assert api.get(f"/api/sessions/{session_id}").status_code == 404
    assert api.delete(f"/api/sessions/{session_id}").status_code == 404


@pytest.mark.asyncio
async def test_file_route_returns_409_when_transcription_starts_during_upload(fake_client):
    shell = TranscriptionShell(fake_client)
    session_id = session_store.create_session(shell)

    class UploadReadDuringTranscription:
        filename = "meeting.m4a"
        content_type = "audio/mp4"

        async def read(self) -> bytes:
            shell.state = ShellState.TRANSCRIBING
            return b"abc"

    with pytest.raises(HTTPException) as exc:
        await main.select_file(session_id, UploadReadDuringTranscription())

    assert exc.value.status_code == 409
    assert shell.audio_file is None


def test_page_surfaces_failed_requests(api):
    page = api.get("/").text

    assert page.count("} catch (err) {") == 5
    assert page.count("alert(err.message);") == 4
    assert "view.error = `Failed to transcribe audio: ${err.message}`;" in page
