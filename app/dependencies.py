# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# The AppContext holds every piece of per-process state: settings, the store
# client, services and rate limiters. It is built once at startup, stored on
# app.state, and injected into route handlers using Depends().
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from app.auth.tokens import TokenService
from app.config import Settings
from app.exceptions import RateLimitError
from core.services import ReelService, StorageService, UserService
from lib.rate_limit import SlidingWindowRateLimiter
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything a request handler needs, owned by the running app."""

    settings: Settings
    client: SupabaseClient | None
    users: UserService
    reels: ReelService
    storage: StorageService
    tokens: TokenService
    login_limiter: SlidingWindowRateLimiter
    upload_limiter: SlidingWindowRateLimiter

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: SupabaseClient | None = None,
    ) -> "AppContext":
        """
        Wire up a context from settings.

        Args:
            settings: Application settings
            client: Store client to use instead of one built from settings
        """
        if client is None:
            client = SupabaseClient(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        return cls(
            settings=settings,
            client=client,
            users=UserService(client, table=settings.USERS_TABLE),
            reels=ReelService(client, table=settings.REELS_TABLE),
            storage=StorageService(settings.upload_path, settings.max_upload_size_bytes),
            tokens=TokenService(settings.SECRET_KEY, settings.TOKEN_EXPIRE_SECONDS),
            login_limiter=SlidingWindowRateLimiter(
                settings.LOGIN_RATE_LIMIT, settings.RATE_LIMIT_WINDOW_SECONDS
            ),
            upload_limiter=SlidingWindowRateLimiter(
                settings.UPLOAD_RATE_LIMIT, settings.RATE_LIMIT_WINDOW_SECONDS
            ),
        )

    def startup(self) -> None:
        self.storage.ensure_directory()

    def shutdown(self) -> None:
        self.login_limiter.reset()
        self.upload_limiter.reset()
        if self.client is not None:
            self.client.close()


def get_context(request: Request) -> AppContext:
    """Get the AppContext of the app serving this request."""
    return request.app.state.context


# Type alias for dependency injection
ContextDep = Annotated[AppContext, Depends(get_context)]


def client_address(request: Request, context: AppContext) -> str:
    """
    Key a request by client address.

    Behind a proxy (TRUST_FORWARDED_FOR) the first X-Forwarded-For entry
    is the client.
    """
    if context.settings.TRUST_FORWARDED_FOR:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimit:
    """
    Dependency that throttles a route per client.

    Usage:
        @router.post("/login", dependencies=[Depends(RateLimit("login_limiter"))])
    """

    def __init__(self, limiter_name: str):
        self.limiter_name = limiter_name

    async def __call__(self, request: Request, context: ContextDep) -> None:
        limiter: SlidingWindowRateLimiter = getattr(context, self.limiter_name)
        key = client_address(request, context)
        allowed, retry_after = await limiter.hit(key)
        if not allowed:
            logger.warning(f"Rate limit hit on {request.url.path} by {key}")
            raise RateLimitError(retry_after)


login_rate_limit = RateLimit("login_limiter")
upload_rate_limit = RateLimit("upload_limiter")
