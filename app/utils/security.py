"""
Security utilities for the CSR Dashboard authentication system.

Provides the session token codec (signed JWT via python-jose) and bcrypt
password hashing. All configuration is sourced from the application
settings singleton so that secrets are never hard-coded in source files.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

import bcrypt
from jose import JWTError, jwt

from app.config import get_settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Password helpers (bcrypt direct; passlib has compatibility issues with
# bcrypt 4.x on Python 3.13)
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(pwd_bytes, salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


# ---------------------------------------------------------------------------
# Signing secret
# ---------------------------------------------------------------------------


@lru_cache
def get_jwt_secret() -> str:
    """Return the token signing secret.

    ``JWT_SECRET`` must be set in production; startup fails otherwise.
    Outside production an unset secret is replaced by a random value that
    lives as long as the process, so sessions do not survive a restart.

    Raises:
        RuntimeError: If ``JWT_SECRET`` is unset and ``ENVIRONMENT`` is
            ``"production"``.
    """
    settings = get_settings()
    if settings.JWT_SECRET:
        return settings.JWT_SECRET

    if settings.is_production:
        raise RuntimeError("JWT_SECRET must be set when ENVIRONMENT=production")

    logger.warning(
        "JWT_SECRET is not set; using a random per-process secret. "
        "Sessions will be invalidated on restart."
    )
    return secrets.token_urlsafe(64)


# ---------------------------------------------------------------------------
# JWT helpers
# ---------------------------------------------------------------------------


def issue_token(claims: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Create a signed session token.

    The token payload is a copy of *claims* augmented with ``iat`` and
    ``exp``. The expiry defaults to ``JWT_EXPIRATION_MINUTES`` (24 h).
    The ``sub`` claim should be set by the caller (``str(user.id)``).

    Args:
        claims: Arbitrary claims to embed in the token payload.
                Must not contain ``exp`` or ``iat``, those are set here.
        expires_delta: Override for the validity window.

    Returns:
        A compact, URL-safe JWT string.

    Example::

        token = issue_token({"sub": str(user.id), "email": user.email})
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = claims.copy()
    payload["iat"] = now
    payload["exp"] = now + (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )

    return jwt.encode(payload, get_jwt_secret(), algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str | None) -> dict[str, Any] | None:
    """Decode and verify a session token.

    Validates signature, expiration and the presence of ``sub``, ``iat``
    and ``exp``. Every failure yields ``None``; the cause is only logged
    at debug level so callers treat all failures as "unauthenticated".

    Args:
        token: A compact JWT string obtained from ``issue_token``.

    Returns:
        The decoded claims on success, ``None`` otherwise.
    """
    if not token or not isinstance(token, str):
        return None

    settings = get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            get_jwt_secret(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require_exp": True, "require_iat": True, "require_sub": True},
        )
    except JWTError as exc:
        logger.debug("Token verification failed: %s", exc)
        return None
    return payload


def build_session_claims(user: Any) -> dict[str, Any]:
    """Claims embedded in a user's session token."""
    return {
        "sub": str(user.id),
        "email": user.email,
        "role_id": user.role_id,
        "department_id": user.department_id,
    }
