"""Transcript handling: parse speaker turns, rename speakers, export and share."""
from .models import TranscriptionTurn
from .parser import parse_transcript, unique_speakers
from .speakers import SpeakerNameMap
from .export import ExportDocument, build_export, render_markdown, render_plain
from .share import BrowserShareTarget, SharePayload, ShareTarget, share_transcript

__all__ = [
    "TranscriptionTurn",
    "parse_transcript",
    "unique_speakers",
    "SpeakerNameMap",
    "ExportDocument",
    "build_export",
    "render_markdown",
    "render_plain",
    "BrowserShareTarget",
    "SharePayload",
    "ShareTarget",
    "share_transcript",
]
