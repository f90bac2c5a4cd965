# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Registration, login and bearer-token authentication.
#
# Usage:
#   from app.auth.dependencies import get_current_user
#   from app.auth import AuthUser
#
#   @router.post("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.models import AuthUser, LoginRequest, RegisterRequest, TokenPayload

__all__ = [
    "AuthUser",
    "LoginRequest",
    "RegisterRequest",
    "TokenPayload",
]
