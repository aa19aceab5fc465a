"""
Auth gate middleware.

Runs before every page request and decides between passing the request
through and redirecting it, based only on the session cookie:

- Paths under ``GATE_BYPASS_PREFIXES`` (API, framework assets, OpenAPI docs)
  are never inspected. API handlers enforce authentication themselves.
- Public paths (``/auth/*``) pass through, except that a visitor who is
  already signed in is sent to the home page.
- Every other path requires a valid session; otherwise the visitor is
  sent to the sign-in page.

The gate never forwards identity to the handler and never rewrites the
cookie.
"""

import logging
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from app.utils.constants import (
    GATE_BYPASS_PREFIXES,
    HOME_PATH,
    PUBLIC_PATH_PREFIX,
    SIGN_IN_PATH,
)
from app.utils.security import verify_token
from app.utils.session import get_session

logger = logging.getLogger(__name__)


def is_bypassed(path: str) -> bool:
    return path.startswith(GATE_BYPASS_PREFIXES)


def is_public(path: str) -> bool:
    return path.startswith(PUBLIC_PATH_PREFIX)


class AuthGateMiddleware(BaseHTTPMiddleware):
    """Redirect page requests according to the session cookie."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if is_bypassed(path):
            return await call_next(request)

        token = get_session(request)
        has_session = token is not None and verify_token(token) is not None

        if is_public(path):
            if has_session:
                return RedirectResponse(HOME_PATH, status_code=307)
            return await call_next(request)

        if not has_session:
            if token is not None:
                logger.info("Invalid or expired session on %s; redirecting to sign-in", path)
            return RedirectResponse(SIGN_IN_PATH, status_code=307)

        return await call_next(request)
