# =============================================================================
# app/middleware.py - Upload Size Limit
# =============================================================================
# Caps the request body on upload paths before FastAPI parses the form.
#
# - A declared Content-Length over the limit is answered with 413 at once.
# - Bodies without one (chunked) are counted as they are received; the
#   request is cut off with 413 as soon as the count passes the limit.
# =============================================================================

import logging

from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.exceptions import FileTooLargeError

logger = logging.getLogger(__name__)


class UploadSizeLimitMiddleware:
    """
    ASGI middleware limiting request body size on the given paths.

    Usage:
        app.add_middleware(
            UploadSizeLimitMiddleware,
            paths={"/api/upload"},
            max_size_bytes=50 * 1024 * 1024,
        )
    """

    def __init__(self, app: ASGIApp, paths: set[str], max_size_bytes: int) -> None:
        self.app = app
        self.paths = set(paths)
        self.max_size_bytes = max_size_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            scope["type"] != "http"
            or scope["method"] != "POST"
            or scope["path"] not in self.paths
        ):
            await self.app(scope, receive, send)
            return

        headers = dict(scope["headers"])
        content_length = headers.get(b"content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                declared = -1
            if declared < 0:
                response = JSONResponse(
                    status_code=400,
                    content={
                        "success": False,
                        "message": "Invalid Content-Length header",
                        "code": "VALIDATION_ERROR",
                    },
                )
                await response(scope, receive, send)
                return
            if declared > self.max_size_bytes:
                logger.warning(f"Rejected {declared} byte upload from Content-Length")
                await self._too_large(scope, receive, send)
                return

        received = 0
        exceeded = False
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received, exceeded
            if exceeded:
                return {"type": "http.disconnect"}
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_size_bytes:
                    exceeded = True
                    logger.warning(f"Cut off upload body after {received} bytes")
                    # Stop the form parser; the app's own response is dropped
                    return {"type": "http.disconnect"}
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            if exceeded and not response_started:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except Exception:
            if not exceeded or response_started:
                raise

        if exceeded and not response_started:
            await self._too_large(scope, receive, send)

    async def _too_large(self, scope: Scope, receive: Receive, send: Send) -> None:
        error = FileTooLargeError(self.max_size_bytes // (1024 * 1024))
        response = JSONResponse(status_code=error.status_code, content=error.to_dict())
        await response(scope, receive, send)
