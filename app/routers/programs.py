"""
Program router.

Mounts under ``/api/programs``. All endpoints require a valid session
cookie.

Endpoints
---------
GET      /        — Paged programs with related-record counts.
POST     /        — Create a draft program owned by the caller.
GET      /{id}
PUT      /{id}    — Partial update.
DELETE   /{id}    — Blocked by related records unless ``force=true``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.routers.params import Force, Pagination, Search, Sorting
from app.schemas.common import DeleteResponse, ErrorResponse, PagedResponse
from app.schemas.program import ProgramListItem, ProgramPayload, ProgramResponse
from app.services import program_service
from app.services.auth_service import get_current_user

router = APIRouter(tags=["Programs"])

CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[Session, Depends(get_db)]
ProgramId = Annotated[int, Path(description="ID program.", ge=1)]

_WRITE_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get("", response_model=PagedResponse[ProgramListItem], summary="Daftar program")
def list_programs(
    db: DbSession,
    _current_user: CurrentUser,
    pagination: Pagination,
    sort: Sorting,
    search: Search = None,
    category_id: Annotated[int | None, Query(ge=1)] = None,
    type_id: Annotated[int | None, Query(ge=1)] = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    department_id: Annotated[int | None, Query(ge=1)] = None,
) -> PagedResponse[ProgramListItem]:
    programs, meta = program_service.list_programs(
        db,
        pagination,
        sort,
        search=search,
        category_id=category_id,
        type_id=type_id,
        status=status_filter,
        department_id=department_id,
    )
    return PagedResponse[ProgramListItem](data=programs, pagination=meta)


@router.post(
    "",
    response_model=ProgramResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Tambah program",
    responses=_WRITE_ERRORS,
)
def create_program(
    payload: ProgramPayload, db: DbSession, current_user: CurrentUser
) -> ProgramResponse:
    program = program_service.create_program(db, payload, created_by=current_user)
    return ProgramResponse.model_validate(program)


@router.get(
    "/{program_id}",
    response_model=ProgramListItem,
    summary="Detail program",
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_program(program_id: ProgramId, db: DbSession, _current_user: CurrentUser) -> ProgramListItem:
    return program_service.get_program(db, program_id)


@router.put(
    "/{program_id}",
    response_model=ProgramResponse,
    summary="Ubah program",
    responses=_WRITE_ERRORS,
)
def update_program(
    program_id: ProgramId, payload: ProgramPayload, db: DbSession, _current_user: CurrentUser
) -> ProgramResponse:
    program = program_service.update_program(db, program_id, payload)
    return ProgramResponse.model_validate(program)


@router.delete(
    "/{program_id}",
    response_model=DeleteResponse,
    summary="Hapus program",
    description=(
        "Ditolak (400) selama program masih memiliki sub program, aktivitas atau "
        "anggaran, kecuali ``force=true``."
    ),
    responses=_WRITE_ERRORS,
)
def delete_program(
    program_id: ProgramId, db: DbSession, _current_user: CurrentUser, force: Force = False
) -> DeleteResponse:
    program_service.delete_program(db, program_id, force=force)
    return DeleteResponse(message="Program berhasil dihapus", deleted_id=program_id)
