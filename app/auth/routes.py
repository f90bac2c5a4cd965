# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for account creation and login:
# - POST /register: create an account (bcrypt-hashed password)
# - POST /login: exchange email/password for a bearer token
# - GET /auth/verify: check that a stored token is still valid
# =============================================================================

import logging

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from app.auth.dependencies import get_current_user
from app.auth.models import (
    AuthUser,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    SuccessResponse,
    VerifyResponse,
)
from app.dependencies import ContextDep, login_rate_limit
from app.exceptions import InvalidCredentialsError
from lib.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter()

# Checked against when the email is unknown, so both login failures cost
# one bcrypt comparison.
_DUMMY_HASH = "$2b$10$CwTycUXWue0Thq9StjUM0uJ8Z6RzE1Yf7uRk3bQd0o9JrVqKXc1xS"


@router.post("/register", response_model=SuccessResponse)
async def register(payload: RegisterRequest, context: ContextDep) -> SuccessResponse:
    """
    Create an account.

    Raises:
        400: If email or password is missing or malformed
        409: If the email is already registered
    """
    password_hash = await run_in_threadpool(
        hash_password, payload.password, context.settings.BCRYPT_ROUNDS
    )
    await run_in_threadpool(context.users.create, payload.email, password_hash)

    return SuccessResponse(message="User registered successfully")


@router.post(
    "/login",
    response_model=LoginResponse,
    dependencies=[Depends(login_rate_limit)],
)
async def login(payload: LoginRequest, context: ContextDep) -> LoginResponse:
    """
    Log in and receive a bearer token.

    Every attempt counts against the client's login rate limit.

    Raises:
        400: If email or password is missing or malformed
        401: If the email is unknown or the password is wrong
        429: If the client has made too many attempts
    """
    user = await run_in_threadpool(context.users.find_by_email, payload.email)

    stored_hash = user.password_hash if user else _DUMMY_HASH
    password_ok = await run_in_threadpool(verify_password, payload.password, stored_hash)

    if user is None or not password_ok:
        logger.info(f"Failed login for {payload.email}")
        raise InvalidCredentialsError()

    token = context.tokens.issue(user.id, user.email)
    logger.info(f"User logged in: {user.id}")

    return LoginResponse(message="Login successful", token=token)


@router.get("/auth/verify", response_model=VerifyResponse)
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> VerifyResponse:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is missing, invalid or expired
    """
    return VerifyResponse(user_id=user.id, email=user.email)
