# =============================================================================
# core/models/reel.py - Reel Schemas
# =============================================================================
# These models define the API contract for reels:
# - ReelCreate: metadata written after a video upload
# - ReelResponse: a reel as returned by GET /api/reels
#
# A reel is immutable once created and is not linked to a user.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# URL prefix uploaded videos are served under
REELS_URL_PREFIX = "/uploads/reels"


class ReelCreate(BaseModel):
    """
    Schema for recording a stored upload.

    Example:
        {"title": "t1", "filename": "1718000000000-my_clip.mp4"}
    """

    title: str = Field(..., min_length=1)
    filename: str = Field(..., min_length=1, max_length=255)


class ReelResponse(BaseModel):
    """
    Schema for returning a reel to clients.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "title": "t1",
            "filename": "1718000000000-my_clip.mp4",
            "created": "2024-06-10T08:00:00Z",
            "url": "/uploads/reels/1718000000000-my_clip.mp4"
        }
    """

    id: str
    title: str
    filename: str
    created: datetime
    url: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ReelResponse":
        """Build a ReelResponse from a store row."""
        return cls(
            id=str(row["id"]),
            title=row["title"],
            filename=row["filename"],
            created=row["created"],
            url=f"{REELS_URL_PREFIX}/{row['filename']}",
        )
