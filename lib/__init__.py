# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase wrapper for table operations
# - passwords.py: bcrypt password hashing
# - rate_limit.py: Sliding window rate limiter
# - utils.py: Shared utilities (stored filename generation)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.passwords import hash_password, verify_password
from lib.rate_limit import SlidingWindowRateLimiter
from lib.utils import build_stored_filename, sanitize_filename

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Passwords
    "hash_password",
    "verify_password",
    # Rate limiting
    "SlidingWindowRateLimiter",
    # Utils
    "build_stored_filename",
    "sanitize_filename",
]
