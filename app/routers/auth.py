"""
Authentication router for the CSR Dashboard API.

Mounts under ``/api/auth`` (prefix set in ``main.py``).

Endpoints:
    POST /login    — Authenticate with email + password, receive the session cookie.
    POST /register — Create an account and sign it in.
    POST /logout   — Clear the session cookie (idempotent).
    GET  /me       — Return the currently authenticated user's summary.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from app.schemas.common import ApiErrorResponse, MessageResponse
from app.services.auth_service import (
    authenticate_user,
    get_current_user,
    register_user,
    to_session_user,
)
from app.utils.exceptions import AuthenticationError, ValidationError
from app.utils.security import build_session_claims, issue_token
from app.utils.session import clear_session, set_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])

_ERRORS = {"model": ApiErrorResponse}


# ---------------------------------------------------------------------------
# POST /login
# ---------------------------------------------------------------------------


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Sign in",
    description=(
        "Checks the credentials and sets the ``auth-token`` session cookie, "
        "valid for 24 hours."
    ),
    responses={
        200: {"description": "Signed in; the session cookie is set."},
        400: {**_ERRORS, "description": "Email or password missing."},
        401: {**_ERRORS, "description": "Unknown email or wrong password."},
        403: {**_ERRORS, "description": "Account is not active."},
    },
)
def login(
    payload: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Authenticate a user and issue the session cookie.

    Unknown emails and wrong passwords share one message so that the
    response does not reveal which accounts exist.

    Args:
        payload: Email and password.
        response: Sub-response used to attach the ``Set-Cookie`` header.
        db: Database session injected by ``get_db``.

    Returns:
        The sanitized user summary.
    """
    email = (payload.email or "").strip()
    password = payload.password or ""
    if not email or not password:
        raise ValidationError("Email and password are required")

    try:
        user = authenticate_user(db, email, password)
    except AuthenticationError:
        logger.warning("Failed login attempt for email='%s'", email)
        raise

    set_session(response, issue_token(build_session_claims(user)))

    logger.info("Successful login for email='%s' role_id=%s", user.email, user.role_id)
    return AuthResponse(message="Login successful", data=to_session_user(user))


# ---------------------------------------------------------------------------
# POST /register
# ---------------------------------------------------------------------------


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    description=(
        "Creates an active account with the default role and department, "
        "then signs it in."
    ),
    responses={
        201: {"description": "Account created; the session cookie is set."},
        400: {**_ERRORS, "description": "Missing fields or password shorter than 8 characters."},
        409: {**_ERRORS, "description": "Email already registered."},
    },
)
def register(
    payload: RegisterRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    name = (payload.name or "").strip()
    email = (payload.email or "").strip()
    password = payload.password or ""
    if not name or not email or not password:
        raise ValidationError("Name, email, and password are required")

    user = register_user(db, name, email, password)
    set_session(response, issue_token(build_session_claims(user)))
    return AuthResponse(message="Registration successful", data=to_session_user(user))


# ---------------------------------------------------------------------------
# POST /logout
# ---------------------------------------------------------------------------


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Sign out",
    description="Expires the session cookie. Succeeds even without a session.",
)
def logout(response: Response) -> MessageResponse:
    clear_session(response)
    return MessageResponse(message="Logged out successfully")


# ---------------------------------------------------------------------------
# GET /me
# ---------------------------------------------------------------------------


@router.get(
    "/me",
    response_model=AuthResponse,
    summary="Current user",
    responses={401: {**_ERRORS, "description": "Missing, invalid or expired session."}},
)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> AuthResponse:
    """Return the summary of the user identified by the session cookie."""
    return AuthResponse(message="Authenticated", data=to_session_user(current_user))
