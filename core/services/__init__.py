# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .reel_service import ReelService
from .storage_service import StorageService

__all__ = [
    "UserService",
    "ReelService",
    "StorageService",
]
