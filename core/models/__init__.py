# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for stored records:
# - user.py: Registered users (credential store rows)
# - reel.py: Uploaded reel metadata
#
# These models define the "contract" between the store and the API.
# =============================================================================

from .reel import REELS_URL_PREFIX, ReelCreate, ReelResponse
from .user import UserRecord

__all__ = [
    "REELS_URL_PREFIX",
    "ReelCreate",
    "ReelResponse",
    "UserRecord",
]
