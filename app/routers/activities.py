"""
Activity router.

Mounts under ``/api/activities``. All endpoints require a valid session
cookie.

Endpoints
---------
GET|POST        /
GET|PUT|DELETE  /{id}
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.routers.params import Pagination, Search, Sorting
from app.schemas.activity import ActivityPayload, ActivityResponse
from app.schemas.common import DeleteResponse, ErrorResponse, PagedResponse
from app.services import activity_service
from app.services.auth_service import get_current_user

router = APIRouter(tags=["Activities"])

CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[Session, Depends(get_db)]
ActivityId = Annotated[int, Path(description="ID aktivitas.", ge=1)]

_WRITE_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get("", response_model=PagedResponse[ActivityResponse], summary="Daftar aktivitas")
def list_activities(
    db: DbSession,
    _current_user: CurrentUser,
    pagination: Pagination,
    sort: Sorting,
    search: Search = None,
    program_id: Annotated[int | None, Query(ge=1)] = None,
    sub_program_id: Annotated[int | None, Query(ge=1)] = None,
    department_id: Annotated[int | None, Query(ge=1)] = None,
    type_filter: Annotated[str | None, Query(alias="type")] = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    priority: Annotated[str | None, Query()] = None,
) -> PagedResponse[ActivityResponse]:
    activities, meta = activity_service.list_activities(
        db,
        pagination,
        sort,
        search=search,
        program_id=program_id,
        sub_program_id=sub_program_id,
        department_id=department_id,
        type=type_filter,
        status=status_filter,
        priority=priority,
    )
    return PagedResponse[ActivityResponse](
        data=[ActivityResponse.model_validate(a) for a in activities], pagination=meta
    )


@router.post(
    "",
    response_model=ActivityResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Tambah aktivitas",
    responses=_WRITE_ERRORS,
)
def create_activity(
    payload: ActivityPayload, db: DbSession, _current_user: CurrentUser
) -> ActivityResponse:
    activity = activity_service.create_activity(db, payload)
    return ActivityResponse.model_validate(activity)


@router.get(
    "/{activity_id}",
    response_model=ActivityResponse,
    summary="Detail aktivitas",
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_activity(
    activity_id: ActivityId, db: DbSession, _current_user: CurrentUser
) -> ActivityResponse:
    return ActivityResponse.model_validate(activity_service.get_activity(db, activity_id))


@router.put(
    "/{activity_id}",
    response_model=ActivityResponse,
    summary="Ubah aktivitas",
    responses=_WRITE_ERRORS,
)
def update_activity(
    activity_id: ActivityId, payload: ActivityPayload, db: DbSession, _current_user: CurrentUser
) -> ActivityResponse:
    activity = activity_service.update_activity(db, activity_id, payload)
    return ActivityResponse.model_validate(activity)


@router.delete(
    "/{activity_id}",
    response_model=DeleteResponse,
    summary="Hapus aktivitas",
    responses=_WRITE_ERRORS,
)
def delete_activity(
    activity_id: ActivityId, db: DbSession, _current_user: CurrentUser
) -> DeleteResponse:
    activity_service.delete_activity(db, activity_id)
    return DeleteResponse(message="Aktivitas berhasil dihapus", deleted_id=activity_id)
