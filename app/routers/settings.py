"""
Company settings router.

Mounts under ``/api/settings``.

Endpoints:
    GET /  — Company profile; a placeholder record is created on first read.
    PUT /  — Replace the company profile (``name`` and ``code`` required).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.common import DataResponse, ErrorResponse
from app.schemas.settings import CompanyPayload, CompanyResponse
from app.services import settings_service
from app.services.auth_service import get_current_user

router = APIRouter(tags=["Settings"])


@router.get(
    "",
    response_model=DataResponse[CompanyResponse],
    summary="Company settings",
    responses={401: {"model": ErrorResponse}},
)
def get_settings_view(
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[User, Depends(get_current_user)],
) -> DataResponse[CompanyResponse]:
    company = settings_service.get_company(db)
    return DataResponse[CompanyResponse](data=CompanyResponse.model_validate(company))


@router.put(
    "",
    response_model=DataResponse[CompanyResponse],
    summary="Update company settings",
    responses={
        400: {"model": ErrorResponse, "description": "Name or code missing, or code taken."},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse, "description": "No company record yet."},
    },
)
def update_settings(
    payload: CompanyPayload,
    db: Annotated[Session, Depends(get_db)],
    _current_user: Annotated[User, Depends(get_current_user)],
) -> DataResponse[CompanyResponse]:
    company = settings_service.update_company(db, payload)
    return DataResponse[CompanyResponse](
        data=CompanyResponse.model_validate(company),
        message="Settings updated successfully",
    )
