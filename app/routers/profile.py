"""
Profile router: the signed-in user reading and editing their own account.

Mounts under ``/api/profile``. Identity always comes from the session
cookie, never from the request body.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.common import DataResponse, ErrorResponse
from app.schemas.user import ProfilePayload, ProfileResponse
from app.services import user_service
from app.services.auth_service import get_current_user

router = APIRouter(tags=["Profile"])


@router.get(
    "",
    response_model=DataResponse[ProfileResponse],
    summary="My profile",
    responses={401: {"model": ErrorResponse}},
)
def get_profile(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> DataResponse[ProfileResponse]:
    return DataResponse[ProfileResponse](data=user_service.get_profile(db, current_user))


@router.put(
    "",
    response_model=DataResponse[ProfileResponse],
    summary="Update my profile",
    description=(
        "Only the supplied fields change. The password is replaced when both "
        "``current_password`` and ``new_password`` are given and the current "
        "one matches."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid field, wrong password or email taken."},
        401: {"model": ErrorResponse},
    },
)
def update_profile(
    payload: ProfilePayload,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> DataResponse[ProfileResponse]:
    user = user_service.update_profile(db, current_user, payload)
    return DataResponse[ProfileResponse](
        data=user_service.get_profile(db, user),
        message="Profile updated successfully",
    )
