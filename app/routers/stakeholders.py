"""
Stakeholder router.

Mounts under ``/api/stakeholders``. All endpoints require a valid session
cookie. The category routes are declared first so ``/categories`` never
reaches the ``/{id}`` handlers.

Endpoints
---------
GET|POST        /categories         — Categories with stakeholder counts.
PUT|DELETE      /categories/{id}
GET|POST        /                   — Paged stakeholders with program counts.
GET|PUT|DELETE  /{id}               — DELETE blocked by program links unless ``force=true``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.routers.params import Force, Pagination, Search, Sorting
from app.schemas.common import DeleteResponse, ErrorResponse, ListResponse, PagedResponse
from app.schemas.master_data import (
    StakeholderCategoryListItem,
    StakeholderCategoryPayload,
    StakeholderCategoryResponse,
)
from app.schemas.stakeholder import StakeholderListItem, StakeholderPayload, StakeholderResponse
from app.services import master_data_service, stakeholder_service
from app.services.auth_service import get_current_user

router = APIRouter(tags=["Stakeholders"])

CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[Session, Depends(get_db)]
CategoryId = Annotated[int, Path(description="ID kategori stakeholder.", ge=1)]
StakeholderId = Annotated[int, Path(description="ID stakeholder.", ge=1)]

_WRITE_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get(
    "/categories",
    response_model=ListResponse[StakeholderCategoryListItem],
    summary="Daftar kategori stakeholder",
)
def list_categories(
    db: DbSession, _current_user: CurrentUser
) -> ListResponse[StakeholderCategoryListItem]:
    categories = master_data_service.list_stakeholder_categories(db)
    return ListResponse[StakeholderCategoryListItem](data=categories, total=len(categories))


@router.post(
    "/categories",
    response_model=StakeholderCategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Tambah kategori stakeholder",
    responses=_WRITE_ERRORS,
)
def create_category(
    payload: StakeholderCategoryPayload, db: DbSession, _current_user: CurrentUser
) -> StakeholderCategoryResponse:
    category = master_data_service.create_stakeholder_category(db, payload)
    return StakeholderCategoryResponse.model_validate(category)


@router.put(
    "/categories/{category_id}",
    response_model=StakeholderCategoryResponse,
    summary="Ubah kategori stakeholder",
    responses=_WRITE_ERRORS,
)
def update_category(
    category_id: CategoryId,
    payload: StakeholderCategoryPayload,
    db: DbSession,
    _current_user: CurrentUser,
) -> StakeholderCategoryResponse:
    category = master_data_service.update_stakeholder_category(db, category_id, payload)
    return StakeholderCategoryResponse.model_validate(category)


@router.delete(
    "/categories/{category_id}",
    response_model=DeleteResponse,
    summary="Hapus kategori stakeholder",
    description="Ditolak (400) selama kategori masih dipakai oleh stakeholder.",
    responses=_WRITE_ERRORS,
)
def delete_category(
    category_id: CategoryId, db: DbSession, _current_user: CurrentUser
) -> DeleteResponse:
    master_data_service.delete_stakeholder_category(db, category_id)
    return DeleteResponse(message="Kategori berhasil dihapus", deleted_id=category_id)


# ---------------------------------------------------------------------------
# Stakeholders
# ---------------------------------------------------------------------------


@router.get("", response_model=PagedResponse[StakeholderListItem], summary="Daftar stakeholder")
def list_stakeholders(
    db: DbSession,
    _current_user: CurrentUser,
    pagination: Pagination,
    sort: Sorting,
    search: Search = None,
    type_filter: Annotated[str | None, Query(alias="type")] = None,
    category_id: Annotated[int | None, Query(ge=1)] = None,
    relationship: Annotated[str | None, Query()] = None,
) -> PagedResponse[StakeholderListItem]:
    stakeholders, meta = stakeholder_service.list_stakeholders(
        db,
        pagination,
        sort,
        search=search,
        type=type_filter,
        category_id=category_id,
        relationship=relationship,
    )
    return PagedResponse[StakeholderListItem](data=stakeholders, pagination=meta)


@router.post(
    "",
    response_model=StakeholderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Tambah stakeholder",
    responses=_WRITE_ERRORS,
)
def create_stakeholder(
    payload: StakeholderPayload, db: DbSession, _current_user: CurrentUser
) -> StakeholderResponse:
    stakeholder = stakeholder_service.create_stakeholder(db, payload)
    return StakeholderResponse.model_validate(stakeholder)


@router.get(
    "/{stakeholder_id}",
    response_model=StakeholderListItem,
    summary="Detail stakeholder",
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_stakeholder(
    stakeholder_id: StakeholderId, db: DbSession, _current_user: CurrentUser
) -> StakeholderListItem:
    return stakeholder_service.get_stakeholder(db, stakeholder_id)


@router.put(
    "/{stakeholder_id}",
    response_model=StakeholderResponse,
    summary="Ubah stakeholder",
    responses=_WRITE_ERRORS,
)
def update_stakeholder(
    stakeholder_id: StakeholderId,
    payload: StakeholderPayload,
    db: DbSession,
    _current_user: CurrentUser,
) -> StakeholderResponse:
    stakeholder = stakeholder_service.update_stakeholder(db, stakeholder_id, payload)
    return StakeholderResponse.model_validate(stakeholder)


@router.delete(
    "/{stakeholder_id}",
    response_model=DeleteResponse,
    summary="Hapus stakeholder",
    description="Ditolak (400) selama stakeholder masih terkait program, kecuali ``force=true``.",
    responses=_WRITE_ERRORS,
)
def delete_stakeholder(
    stakeholder_id: StakeholderId, db: DbSession, _current_user: CurrentUser, force: Force = False
) -> DeleteResponse:
    stakeholder_service.delete_stakeholder(db, stakeholder_id, force=force)
    return DeleteResponse(message="Stakeholder berhasil dihapus", deleted_id=stakeholder_id)
