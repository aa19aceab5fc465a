"""
Master Data router.

Mounts under ``/api/master`` (prefix set in ``main.py``).

Reference data maintained from the settings screens: small, name-keyed
tables referenced by programs, activities and budgets. Every mutation
runs the guards of ``master_data_service`` (required fields, existence,
uniqueness, and for deletes a zero dependent-record count).

All endpoints require a valid session cookie (``get_current_user``).

Endpoints
---------
GET|POST        /departments              — Departments with parent and usage counts.
PUT|DELETE      /departments/{id}
GET|POST        /category-programs        — Program categories.
PUT|DELETE      /category-programs/{id}
GET|POST        /type-programs            — Program types.
PUT|DELETE      /type-programs/{id}
GET|POST        /users                    — User accounts.
PUT|DELETE      /users/{id}
GET             /roles                    — Roles for the user form dropdown.
GET             /programs                 — Approved and active programs.
GET             /projects                 — Planned and active sub-programs.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.common import DeleteResponse, ErrorResponse, ListResponse
from app.schemas.master_data import (
    CategoryProgramResponse,
    DepartmentListItem,
    DepartmentPayload,
    DepartmentResponse,
    NamePayload,
    RoleResponse,
    TypeProgramResponse,
)
from app.schemas.program import ProgramOption, SubProgramOption
from app.schemas.user import UserPayload, UserResponse
from app.services import master_data_service, program_service, user_service
from app.services.auth_service import get_current_user
from app.services.master_data_service import CATEGORY_PROGRAM, TYPE_PROGRAM

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Master Data"])

CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[Session, Depends(get_db)]
RecordId = Annotated[int, Path(description="ID record.", ge=1)]

_WRITE_ERRORS = {
    400: {"model": ErrorResponse, "description": "Validasi gagal atau nama sudah dipakai."},
    401: {"model": ErrorResponse, "description": "Sesi tidak ada atau tidak valid."},
    404: {"model": ErrorResponse, "description": "Record tidak ditemukan."},
}


# ---------------------------------------------------------------------------
# Departments
# ---------------------------------------------------------------------------


@router.get(
    "/departments",
    response_model=ListResponse[DepartmentListItem],
    summary="Daftar departemen",
    description=(
        "Semua departemen urut nama, lengkap dengan departemen induk dan "
        "jumlah user, program, aktivitas, anggaran dan sub-departemen."
    ),
)
def list_departments(db: DbSession, _current_user: CurrentUser) -> ListResponse[DepartmentListItem]:
    departments = master_data_service.list_departments(db)
    return ListResponse[DepartmentListItem](data=departments, total=len(departments))


@router.post(
    "/departments",
    response_model=DepartmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Tambah departemen",
    responses=_WRITE_ERRORS,
)
def create_department(
    payload: DepartmentPayload, db: DbSession, _current_user: CurrentUser
) -> DepartmentResponse:
    department = master_data_service.create_department(db, payload)
    return DepartmentResponse.model_validate(department)


@router.put(
    "/departments/{department_id}",
    response_model=DepartmentResponse,
    summary="Ubah departemen",
    responses=_WRITE_ERRORS,
)
def update_department(
    department_id: RecordId,
    payload: DepartmentPayload,
    db: DbSession,
    _current_user: CurrentUser,
) -> DepartmentResponse:
    department = master_data_service.update_department(db, department_id, payload)
    return DepartmentResponse.model_validate(department)


@router.delete(
    "/departments/{department_id}",
    response_model=DeleteResponse,
    summary="Hapus departemen",
    description="Ditolak (400) selama masih ada user, program, aktivitas, anggaran atau sub-departemen.",
    responses=_WRITE_ERRORS,
)
def delete_department(
    department_id: RecordId, db: DbSession, _current_user: CurrentUser
) -> DeleteResponse:
    master_data_service.delete_department(db, department_id)
    return DeleteResponse(message="Departemen berhasil dihapus", deleted_id=department_id)


# ---------------------------------------------------------------------------
# Category programs
# ---------------------------------------------------------------------------


@router.get(
    "/category-programs",
    response_model=ListResponse[CategoryProgramResponse],
    summary="Daftar kategori program",
)
def list_category_programs(
    db: DbSession, _current_user: CurrentUser
) -> ListResponse[CategoryProgramResponse]:
    rows = master_data_service.list_named(db, CATEGORY_PROGRAM)
    return ListResponse[CategoryProgramResponse](
        data=[CategoryProgramResponse.model_validate(r) for r in rows], total=len(rows)
    )


@router.post(
    "/category-programs",
    response_model=CategoryProgramResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Tambah kategori program",
    responses=_WRITE_ERRORS,
)
def create_category_program(
    payload: NamePayload, db: DbSession, _current_user: CurrentUser
) -> CategoryProgramResponse:
    category = master_data_service.create_named(db, CATEGORY_PROGRAM, payload.name)
    return CategoryProgramResponse.model_validate(category)


@router.put(
    "/category-programs/{category_id}",
    response_model=CategoryProgramResponse,
    summary="Ubah kategori program",
    responses=_WRITE_ERRORS,
)
def update_category_program(
    category_id: RecordId,
    payload: NamePayload,
    db: DbSession,
    _current_user: CurrentUser,
) -> CategoryProgramResponse:
    category = master_data_service.update_named(db, CATEGORY_PROGRAM, category_id, payload.name)
    return CategoryProgramResponse.model_validate(category)


@router.delete(
    "/category-programs/{category_id}",
    response_model=DeleteResponse,
    summary="Hapus kategori program",
    description="Ditolak (400) selama kategori masih dipakai oleh program.",
    responses=_WRITE_ERRORS,
)
def delete_category_program(
    category_id: RecordId, db: DbSession, _current_user: CurrentUser
) -> DeleteResponse:
    master_data_service.delete_named(db, CATEGORY_PROGRAM, category_id)
    return DeleteResponse(message=CATEGORY_PROGRAM.deleted, deleted_id=category_id)


# ---------------------------------------------------------------------------
# Type programs
# ---------------------------------------------------------------------------


@router.get(
    "/type-programs",
    response_model=ListResponse[TypeProgramResponse],
    summary="Daftar tipe program",
)
def list_type_programs(
    db: DbSession, _current_user: CurrentUser
) -> ListResponse[TypeProgramResponse]:
    rows = master_data_service.list_named(db, TYPE_PROGRAM)
    return ListResponse[TypeProgramResponse](
        data=[TypeProgramResponse.model_validate(r) for r in rows], total=len(rows)
    )


@router.post(
    "/type-programs",
    response_model=TypeProgramResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Tambah tipe program",
    responses=_WRITE_ERRORS,
)
def create_type_program(
    payload: NamePayload, db: DbSession, _current_user: CurrentUser
) -> TypeProgramResponse:
    type_program = master_data_service.create_named(db, TYPE_PROGRAM, payload.name)
    return TypeProgramResponse.model_validate(type_program)


@router.put(
    "/type-programs/{type_id}",
    response_model=TypeProgramResponse,
    summary="Ubah tipe program",
    responses=_WRITE_ERRORS,
)
def update_type_program(
    type_id: RecordId,
    payload: NamePayload,
    db: DbSession,
    _current_user: CurrentUser,
) -> TypeProgramResponse:
    type_program = master_data_service.update_named(db, TYPE_PROGRAM, type_id, payload.name)
    return TypeProgramResponse.model_validate(type_program)


@router.delete(
    "/type-programs/{type_id}",
    response_model=DeleteResponse,
    summary="Hapus tipe program",
    description="Ditolak (400) selama tipe masih dipakai oleh program.",
    responses=_WRITE_ERRORS,
)
def delete_type_program(
    type_id: RecordId, db: DbSession, _current_user: CurrentUser
) -> DeleteResponse:
    master_data_service.delete_named(db, TYPE_PROGRAM, type_id)
    return DeleteResponse(message=TYPE_PROGRAM.deleted, deleted_id=type_id)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@router.get(
    "/users",
    response_model=ListResponse[UserResponse],
    summary="Daftar user",
)
def list_users(db: DbSession, _current_user: CurrentUser) -> ListResponse[UserResponse]:
    users = user_service.list_users(db)
    return ListResponse[UserResponse](
        data=[UserResponse.model_validate(u) for u in users], total=len(users)
    )


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Tambah user",
    responses=_WRITE_ERRORS,
)
def create_user(
    payload: UserPayload, db: DbSession, _current_user: CurrentUser
) -> UserResponse:
    user = user_service.create_user(db, payload)
    return UserResponse.model_validate(user)


@router.put(
    "/users/{user_id}",
    response_model=UserResponse,
    summary="Ubah user",
    responses=_WRITE_ERRORS,
)
def update_user(
    user_id: RecordId,
    payload: UserPayload,
    db: DbSession,
    _current_user: CurrentUser,
) -> UserResponse:
    user = user_service.update_user(db, user_id, payload)
    return UserResponse.model_validate(user)


@router.delete(
    "/users/{user_id}",
    response_model=DeleteResponse,
    summary="Hapus user",
    description="Ditolak (400) selama user masih terkait program, aktivitas atau stakeholder.",
    responses=_WRITE_ERRORS,
)
def delete_user(user_id: RecordId, db: DbSession, _current_user: CurrentUser) -> DeleteResponse:
    user_service.delete_user(db, user_id)
    return DeleteResponse(message="User berhasil dihapus", deleted_id=user_id)


# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------


@router.get(
    "/roles",
    response_model=ListResponse[RoleResponse],
    summary="Daftar role",
    description="Role beserta daftar permission dan jumlah user. Dipakai oleh dropdown form user.",
)
def list_roles(db: DbSession, _current_user: CurrentUser) -> ListResponse[RoleResponse]:
    roles = master_data_service.list_roles(db)
    return ListResponse[RoleResponse](data=roles, total=len(roles))


# ---------------------------------------------------------------------------
# Program / project dropdowns
# ---------------------------------------------------------------------------


@router.get(
    "/programs",
    response_model=ListResponse[ProgramOption],
    summary="Dropdown program",
    description="Program berstatus approved atau active, urut nama.",
)
def list_program_options(db: DbSession, _current_user: CurrentUser) -> ListResponse[ProgramOption]:
    programs = program_service.list_program_options(db)
    return ListResponse[ProgramOption](data=programs, total=len(programs))


@router.get(
    "/projects",
    response_model=ListResponse[SubProgramOption],
    summary="Dropdown sub program",
    description="Sub program berstatus planned atau active, urut nama.",
)
def list_project_options(
    db: DbSession, _current_user: CurrentUser
) -> ListResponse[SubProgramOption]:
    sub_programs = program_service.list_sub_program_options(db)
    return ListResponse[SubProgramOption](data=sub_programs, total=len(sub_programs))
