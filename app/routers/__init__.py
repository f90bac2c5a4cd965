# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - reels.py: Video upload and reel listing endpoints
#
# Authentication routes live in app/auth/routes.py.
# Each router is mounted in main.py under the /api prefix.
# =============================================================================

from . import health
from . import reels

__all__ = [
    "health",
    "reels",
]
