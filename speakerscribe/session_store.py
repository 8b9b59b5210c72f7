"""
In-memory session store. One TranscriptionShell per browser session.
session_id is generated on the backend when the page creates a session.
Nothing is persisted; a restart forgets every session.
"""
from __future__ import annotations

import uuid

from speakerscribe.shell import TranscriptionShell

_session_store: dict[str, TranscriptionShell] = {}


def generate_session_id() -> str:
    """Generate a new session_id (UUID hex, 12 chars). Backend only."""
    return uuid.uuid4().hex[:12]


def create_session(shell: TranscriptionShell) -> str:
    """Store a new shell under a fresh session_id and return the id."""
    session_id = generate_session_id()
    while session_id in _session_store:
        session_id = generate_session_id()
    _session_store[session_id] = shell
    return session_id


def get_session(session_id: str) -> TranscriptionShell | None:
    """Return the shell or None if not found."""
    return _session_store.get(session_id)


def delete_session(session_id: str) -> bool:
    """Remove session from store. Return True if it existed."""
    if session_id in _session_store:
        del _session_store[session_id]
        return True
    return False


def clear_sessions() -> None:
    """Drop every session (app shutdown)."""
    _session_store.clear()
