"""Pydantic schemas for API request/response."""
from speakerscribe.schemas.session import RenameRequest, SessionResponse, TurnOut
from speakerscribe.schemas.share import ShareRequest, ShareResponse

__all__ = [
    "RenameRequest",
    "SessionResponse",
    "TurnOut",
    "ShareRequest",
    "ShareResponse",
]
