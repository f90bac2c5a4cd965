# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.post("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.auth.models import AuthUser
from app.dependencies import ContextDep
from app.exceptions import MissingAuthError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor. Missing/malformed headers are reported by
# get_current_user so they share the API's error envelope.
security = HTTPBearer(auto_error=False)


async def get_current_user(
    context: ContextDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """
    Extract and validate the user from a bearer token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the signature and expiry
    3. Returns an AuthUser with the user's ID and email

    Raises:
        MissingAuthError: 401 if there is no "Bearer <token>" header
        InvalidTokenError: 401 if the token is invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise MissingAuthError()

    payload = context.tokens.verify(credentials.credentials)

    logger.debug(f"Authenticated user: {payload.sub}")
    return AuthUser(id=payload.sub, email=payload.email)
