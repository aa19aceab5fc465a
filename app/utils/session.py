"""
Session cookie accessor.

Reads and writes the signed session token as an HTTP-only, same-site
strict cookie. No validation happens here; token validity belongs to
``app.utils.security.verify_token``.
"""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import Response

from app.config import get_settings


def _cookie_options() -> dict[str, object]:
    settings = get_settings()
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "strict",
        "path": "/",
    }


def set_session(response: Response, token: str) -> None:
    """Attach the session cookie carrying *token* to *response*."""
    settings = get_settings()
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_MAX_AGE,
        **_cookie_options(),
    )


def clear_session(response: Response) -> None:
    """Expire the session cookie immediately (empty value, max-age 0)."""
    settings = get_settings()
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        "",
        max_age=0,
        **_cookie_options(),
    )


def get_session(request: Request) -> str | None:
    """Return the raw session token from the request cookies, if any."""
    return request.cookies.get(get_settings().SESSION_COOKIE_NAME) or None
