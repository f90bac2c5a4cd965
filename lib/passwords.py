# =============================================================================
# lib/passwords.py - Password Hashing
# =============================================================================
# Salted adaptive hashing for stored credentials (bcrypt).
# Plaintext passwords are never stored or compared directly.
# =============================================================================

import logging

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """
    Hash a plaintext password with a fresh salt.

    Args:
        password: Plaintext password (at most 72 bytes once UTF-8 encoded)
        rounds: bcrypt cost factor

    Returns:
        The bcrypt hash as a string, e.g. "$2b$10$..."
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a stored hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError as e:
        # Malformed stored hash or over-long password
        logger.warning(f"Password check failed: {e}")
        return False
