"""
Role and permission management router.

Mounts under ``/api/management``. All endpoints require a valid session
cookie.

Endpoints
---------
GET|POST      /roles            — Paged roles with user counts.
PUT|DELETE    /roles/{id}       — DELETE blocked while users hold the role.
GET           /permissions      — Permission catalogue, filterable.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.routers.params import Pagination, Search, Sorting
from app.schemas.common import DeleteResponse, ErrorResponse, PagedResponse
from app.schemas.management import PermissionCatalogue, RolePayload
from app.schemas.master_data import RoleResponse
from app.services import management_service
from app.services.auth_service import get_current_user

router = APIRouter(tags=["Management"])

CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[Session, Depends(get_db)]
RoleId = Annotated[int, Path(description="ID role.", ge=1)]

_WRITE_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get("/roles", response_model=PagedResponse[RoleResponse], summary="Daftar role")
def list_roles(
    db: DbSession,
    _current_user: CurrentUser,
    pagination: Pagination,
    sort: Sorting,
    search: Search = None,
    level: Annotated[str | None, Query()] = None,
) -> PagedResponse[RoleResponse]:
    roles, meta = management_service.list_roles(db, pagination, sort, search=search, level=level)
    return PagedResponse[RoleResponse](data=roles, pagination=meta)


@router.post(
    "/roles",
    response_model=RoleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Tambah role",
    responses=_WRITE_ERRORS,
)
def create_role(payload: RolePayload, db: DbSession, _current_user: CurrentUser) -> RoleResponse:
    return management_service.create_role(db, payload)


@router.put(
    "/roles/{role_id}",
    response_model=RoleResponse,
    summary="Ubah role",
    responses=_WRITE_ERRORS,
)
def update_role(
    role_id: RoleId, payload: RolePayload, db: DbSession, _current_user: CurrentUser
) -> RoleResponse:
    return management_service.update_role(db, role_id, payload)


@router.delete(
    "/roles/{role_id}",
    response_model=DeleteResponse,
    summary="Hapus role",
    responses=_WRITE_ERRORS,
)
def delete_role(role_id: RoleId, db: DbSession, _current_user: CurrentUser) -> DeleteResponse:
    management_service.delete_role(db, role_id)
    return DeleteResponse(message="Role deleted successfully", deleted_id=role_id)


@router.get(
    "/permissions",
    response_model=PermissionCatalogue,
    summary="Katalog permission",
)
def list_permissions(
    _current_user: CurrentUser,
    search: Search = None,
    category: Annotated[str | None, Query()] = None,
) -> PermissionCatalogue:
    return management_service.list_permissions(search=search, category=category)
