"""
Catch-all for unexpected exceptions, installed inside the CORS layer.

Exception handlers registered for ``Exception`` run in Starlette's
``ServerErrorMiddleware``, which wraps every user middleware. A 500 built
there never passes through ``CORSMiddleware``, so browsers on another
origin cannot read it. This middleware answers the same generic 500 body
from inside the stack instead.
"""

import logging
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.error_handlers import unhandled_error_response

logger = logging.getLogger(__name__)


class ErrorGuardMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return unhandled_error_response(request, exc)
