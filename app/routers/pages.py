"""
Server-rendered pages.

Access control for these routes is done by ``AuthGateMiddleware`` before
the handler runs; the handlers only render templates. The forms post JSON
to ``/api/auth/*`` from the browser.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.config import get_settings

settings = get_settings()

router = APIRouter(tags=["Pages"], include_in_schema=False)
templates = Jinja2Templates(directory=str(settings.TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse)
def dashboard_page(request: Request):
    return templates.TemplateResponse(
        request, "dashboard.html", {"app_name": settings.APP_NAME}
    )


@router.get("/auth/sign-in", response_class=HTMLResponse)
def sign_in_page(request: Request):
    return templates.TemplateResponse(
        request, "sign_in.html", {"app_name": settings.APP_NAME}
    )


@router.get("/auth/sign-up", response_class=HTMLResponse)
def sign_up_page(request: Request):
    return templates.TemplateResponse(
        request, "sign_up.html", {"app_name": settings.APP_NAME}
    )
