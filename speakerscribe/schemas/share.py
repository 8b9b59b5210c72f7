"""Schemas for POST /api/sessions/{id}/share."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ShareRequest(BaseModel):
    """What the browser can share (from navigator.canShare)."""

    files_supported: bool = Field(False, description="True when the browser can share files")
    title: str | None = Field(None, description="Optional share title")


class ShareResponse(BaseModel):
    """Payload the page hands to navigator.share."""

    kind: Literal["file", "text"]
    title: str
    text: str
    filename: str | None = None
    media_type: str | None = None
