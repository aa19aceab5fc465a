"""
Sub-program router.

Mounts under ``/api/sub-programs``. All endpoints require a valid session
cookie.

Endpoints
---------
GET|POST      /
GET|PUT|DELETE  /{id}    — DELETE blocked by activities or budgets unless ``force=true``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.routers.params import Force, Pagination, Search, Sorting
from app.schemas.common import DeleteResponse, ErrorResponse, PagedResponse
from app.schemas.program import SubProgramListItem, SubProgramPayload, SubProgramResponse
from app.services import program_service
from app.services.auth_service import get_current_user

router = APIRouter(tags=["Sub Programs"])

CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[Session, Depends(get_db)]
SubProgramId = Annotated[int, Path(description="ID sub program.", ge=1)]

_WRITE_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get("", response_model=PagedResponse[SubProgramListItem], summary="Daftar sub program")
def list_sub_programs(
    db: DbSession,
    _current_user: CurrentUser,
    pagination: Pagination,
    sort: Sorting,
    search: Search = None,
    program_id: Annotated[int | None, Query(ge=1)] = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
) -> PagedResponse[SubProgramListItem]:
    sub_programs, meta = program_service.list_sub_programs(
        db, pagination, sort, search=search, program_id=program_id, status=status_filter
    )
    return PagedResponse[SubProgramListItem](data=sub_programs, pagination=meta)


@router.post(
    "",
    response_model=SubProgramResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Tambah sub program",
    responses=_WRITE_ERRORS,
)
def create_sub_program(
    payload: SubProgramPayload, db: DbSession, _current_user: CurrentUser
) -> SubProgramResponse:
    sub_program = program_service.create_sub_program(db, payload)
    return SubProgramResponse.model_validate(sub_program)


@router.get(
    "/{sub_program_id}",
    response_model=SubProgramListItem,
    summary="Detail sub program",
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_sub_program(
    sub_program_id: SubProgramId, db: DbSession, _current_user: CurrentUser
) -> SubProgramListItem:
    return program_service.get_sub_program(db, sub_program_id)


@router.put(
    "/{sub_program_id}",
    response_model=SubProgramResponse,
    summary="Ubah sub program",
    responses=_WRITE_ERRORS,
)
def update_sub_program(
    sub_program_id: SubProgramId,
    payload: SubProgramPayload,
    db: DbSession,
    _current_user: CurrentUser,
) -> SubProgramResponse:
    sub_program = program_service.update_sub_program(db, sub_program_id, payload)
    return SubProgramResponse.model_validate(sub_program)


@router.delete(
    "/{sub_program_id}",
    response_model=DeleteResponse,
    summary="Hapus sub program",
    responses=_WRITE_ERRORS,
)
def delete_sub_program(
    sub_program_id: SubProgramId, db: DbSession, _current_user: CurrentUser, force: Force = False
) -> DeleteResponse:
    program_service.delete_sub_program(db, sub_program_id, force=force)
    return DeleteResponse(message="Sub program berhasil dihapus", deleted_id=sub_program_id)
