# =============================================================================
# app/auth/tokens.py - Bearer Token Issuing and Verification
# =============================================================================
# Signs and verifies HS256 JWTs with the server SECRET_KEY.
#
# Claims:
#   sub   - user ID
#   email - user email
#   iat   - issued at (epoch seconds)
#   exp   - expiry (iat + TOKEN_EXPIRE_SECONDS)
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import ValidationError

from app.auth.models import TokenPayload
from app.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class TokenService:
    """
    Issues and verifies signed bearer tokens.

    Example:
        tokens = TokenService(settings.SECRET_KEY, expire_seconds=3600)
        token = tokens.issue(user_id="...", email="a@x.com")
        payload = tokens.verify(token)
    """

    def __init__(self, secret_key: str, expire_seconds: int = 3600):
        self._secret_key = secret_key
        self.expire_seconds = expire_seconds

    def issue(
        self,
        user_id: str,
        email: str,
        issued_at: datetime | None = None,
    ) -> str:
        """
        Sign a token for a user.

        Args:
            user_id: Stored user ID, becomes the `sub` claim
            email: User email
            issued_at: Issue time (defaults to now, UTC)

        Returns:
            Encoded JWT string
        """
        issued_at = issued_at or datetime.now(timezone.utc)
        expires_at = issued_at + timedelta(seconds=self.expire_seconds)

        claims = {
            "sub": str(user_id),
            "email": email,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(claims, self._secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenPayload:
        """
        Verify a token's signature and expiry and return its claims.

        Raises:
            InvalidTokenError: If the token is expired, forged or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[ALGORITHM],
                options={"require_exp": True, "require_sub": True},
            )
        except ExpiredSignatureError:
            logger.warning("Bearer token has expired")
            raise InvalidTokenError("Token has expired")
        except JWTError as e:
            logger.warning(f"Bearer token validation failed: {e}")
            raise InvalidTokenError("Invalid token")

        try:
            return TokenPayload(**payload)
        except ValidationError:
            logger.warning("Bearer token has malformed claims")
            raise InvalidTokenError("Invalid token: malformed claims")
