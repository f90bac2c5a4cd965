# =============================================================================
# app/routers/reels.py - Reel Upload and Listing
# =============================================================================
# Handles video uploads (validation, storage, metadata) and the reel feed.
# =============================================================================

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from starlette.concurrency import run_in_threadpool

from app.auth import AuthUser
from app.auth.dependencies import get_current_user
from app.dependencies import ContextDep, upload_rate_limit
from app.exceptions import UnsupportedMediaError, UploadValidationError
from core.models.reel import ReelCreate, ReelResponse

logger = logging.getLogger(__name__)

router = APIRouter()

VIDEO_CONTENT_TYPE_PREFIX = "video/"


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/upload", dependencies=[Depends(upload_rate_limit)])
async def upload_reel(
    context: ContextDep,
    user: AuthUser = Depends(get_current_user),
    video: Annotated[Optional[UploadFile], File(description="Video file to upload")] = None,
    title: Annotated[Optional[str], Form(description="Reel title")] = None,
):
    """
    Upload a video as a new reel.

    This endpoint:
    1. Checks the client's upload rate limit
    2. Verifies the bearer token
    3. Validates the form (video file, title, video/* content type)
    4. Streams the file into the upload directory
    5. Records the reel

    Returns the created reel.
    """
    # =========================================================================
    # 1. Validate Form
    # =========================================================================

    missing = []
    if video is None or not video.filename:
        missing.append("video")
    if title is None or not title.strip():
        missing.append("title")
    if missing:
        raise UploadValidationError(missing)

    content_type = video.content_type or ""
    if not content_type.startswith(VIDEO_CONTENT_TYPE_PREFIX):
        raise UnsupportedMediaError(video.content_type)

    # =========================================================================
    # 2. Store File
    # =========================================================================

    filename, size = await context.storage.save_upload(video)

    # =========================================================================
    # 3. Record Reel
    # =========================================================================

    try:
        reel = await run_in_threadpool(
            context.reels.create,
            ReelCreate(title=title.strip(), filename=filename),
        )
    except Exception:
        # Don't leave an unlisted file behind
        context.storage.delete(filename)
        raise

    logger.info(f"Upload by {user.id}: {filename} ({size} bytes) as reel {reel.id}")

    return {
        "success": True,
        "message": "Upload successful",
        "reel": reel.model_dump(mode="json"),
    }


@router.get("/reels", response_model=list[ReelResponse])
async def list_reels(context: ContextDep) -> list[ReelResponse]:
    """
    List all reels, newest first.
    """
    return await run_in_threadpool(context.reels.list_reels)
