"""Shared fixtures: a scripted transcription client and an API test client."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from speakerscribe import session_store
from speakerscribe.audio.receiver import AudioFile
from speakerscribe.main import app

from .fakes import FakeTranscriptionClient


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for key in ("GEMINI_API_KEY", "GEMINI_MODEL", "DEFAULT_SPEAKER_LABEL", "EXPORT_BASENAME"):
        monkeypatch.delenv(key, raising=False)
    yield
    session_store.clear_sessions()


@pytest.fixture
def fake_client() -> FakeTranscriptionClient:
    return FakeTranscriptionClient(result="Speaker 1: Hi\nSpeaker 2: Hello\nSpeaker 1: Bye")


@pytest.fixture
def m4a_file() -> AudioFile:
    return AudioFile(filename="meeting.m4a", content_type="audio/mp4", data=b"\x00\x01audio")


@pytest.fixture
def api(fake_client):
    with TestClient(app) as client:
        app.state.transcription_client = fake_client
        yield client
