"""
Authentication business logic for the CSR Dashboard.

Provides:
- ``authenticate_user`` — credential verification against the DB.
- ``register_user`` — self-service account creation.
- ``get_current_user`` — FastAPI dependency that resolves the caller from
  the session cookie. Protected handlers use it to re-derive identity; the
  auth gate never forwards one.
- ``to_session_user`` — sanitized summary returned by ``/api/auth``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import Depends, Request, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.auth import SessionUser
from app.services.seed_service import ensure_default_department, ensure_default_role
from app.utils.constants import MAX_PASSWORD_BYTES, MIN_PASSWORD_LENGTH, STATUS_ACTIVE
from app.utils.exceptions import (
    AuthenticationError,
    ConflictError,
    InactiveAccountError,
    ValidationError,
)
from app.utils.security import hash_password, verify_password, verify_token
from app.utils.session import get_session

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password"


# ---------------------------------------------------------------------------
# Core authentication function
# ---------------------------------------------------------------------------


def authenticate_user(db: Session, email: str, password: str) -> User:
    """Verify email/password credentials against the database.

    The password is checked before the account status, so the 403 for an
    inactive account is only ever returned to someone who knows the
    password.

    Args:
        db: An active SQLAlchemy session (injected via ``get_db``).
        email: The login email submitted by the client.
        password: The plain-text password submitted by the client.

    Returns:
        The ``User`` ORM instance on success.

    Raises:
        AuthenticationError: Unknown email or wrong password (401).
        InactiveAccountError: Correct credentials, inactive account (403).
    """
    user: User | None = db.query(User).filter(User.email == email).first()

    if user is None:
        logger.debug("authenticate_user: unknown email '%s'", email)
        raise AuthenticationError(INVALID_CREDENTIALS)

    if not verify_password(password, user.password_hash):
        logger.debug("authenticate_user: wrong password for '%s'", email)
        raise AuthenticationError(INVALID_CREDENTIALS)

    if user.status != STATUS_ACTIVE:
        raise InactiveAccountError(
            "Your account is not active. Please contact administrator."
        )

    # Best-effort last-login update; never fails the login.
    try:
        user.last_login = datetime.now(timezone.utc)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("Could not update last_login for '%s'", email)

    return user


def register_user(db: Session, name: str, email: str, password: str) -> User:
    """Create an active account with the default role and department.

    Args:
        db: Active SQLAlchemy session.
        name: Display name, already stripped and non-blank.
        email: Email, already stripped and non-blank.
        password: Plain-text password.

    Returns:
        The new ``User`` with ``role`` and ``department`` loaded.

    Raises:
        ValidationError: Password shorter than ``MIN_PASSWORD_LENGTH`` or
            longer than ``MAX_PASSWORD_BYTES`` in UTF-8 (400).
        ConflictError: Email already registered (409).
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
        )

    email_taken = ConflictError(
        "Email already registered", status_code=status.HTTP_409_CONFLICT
    )
    if db.query(User.id).filter(User.email == email).first() is not None:
        raise email_taken

    role = ensure_default_role(db)
    department = ensure_default_department(db)

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role_id=role.id,
        department_id=department.id,
        status=STATUS_ACTIVE,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise email_taken
    db.refresh(user)

    logger.info("Registered user id=%s email='%s'", user.id, user.email)
    return user


def to_session_user(user: User) -> SessionUser:
    """Build the sanitized summary; never includes the password hash."""
    return SessionUser(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.name if user.role else None,
        department=user.department.name if user.department else None,
    )


# ---------------------------------------------------------------------------
# FastAPI dependency: current authenticated user
# ---------------------------------------------------------------------------


def get_current_user(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """FastAPI dependency that resolves the caller's identity from the session cookie.

    Verifies the token signature and expiration, then loads the
    corresponding active ``User`` row.

    Raises:
        AuthenticationError: If the cookie is missing, invalid or expired,
            or if the referenced user no longer exists or is inactive.
    """
    payload = verify_token(get_session(request))
    if payload is None:
        raise AuthenticationError()

    # The ``sub`` claim stores the user's primary key as a string.
    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError()

    user: User | None = (
        db.query(User)
        .filter(User.id == user_id, User.status == STATUS_ACTIVE)
        .first()
    )
    if user is None:
        raise AuthenticationError()

    return user
