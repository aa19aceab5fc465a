"""
Budget router.

Mounts under ``/api/budgets``. All endpoints require a valid session
cookie.

Endpoints
---------
GET|POST        /
GET|PUT|DELETE  /{id}    — DELETE refused for spent budgets.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.routers.params import Pagination, Search, Sorting
from app.schemas.budget import BudgetPayload, BudgetResponse
from app.schemas.common import DeleteResponse, ErrorResponse, PagedResponse
from app.services import budget_service
from app.services.auth_service import get_current_user

router = APIRouter(tags=["Budgets"])

CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[Session, Depends(get_db)]
BudgetId = Annotated[int, Path(description="ID anggaran.", ge=1)]

_WRITE_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get("", response_model=PagedResponse[BudgetResponse], summary="Daftar anggaran")
def list_budgets(
    db: DbSession,
    _current_user: CurrentUser,
    pagination: Pagination,
    sort: Sorting,
    search: Search = None,
    department_id: Annotated[int | None, Query(ge=1)] = None,
    program_id: Annotated[int | None, Query(ge=1)] = None,
    sub_program_id: Annotated[int | None, Query(ge=1)] = None,
    type_filter: Annotated[str | None, Query(alias="type")] = None,
    category: Annotated[str | None, Query()] = None,
    status_filter: Annotated[str | None, Query(alias="status")] = None,
) -> PagedResponse[BudgetResponse]:
    budgets, meta = budget_service.list_budgets(
        db,
        pagination,
        sort,
        search=search,
        department_id=department_id,
        program_id=program_id,
        sub_program_id=sub_program_id,
        type=type_filter,
        category=category,
        status=status_filter,
    )
    return PagedResponse[BudgetResponse](
        data=[BudgetResponse.model_validate(b) for b in budgets], pagination=meta
    )


@router.post(
    "",
    response_model=BudgetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Tambah anggaran",
    responses=_WRITE_ERRORS,
)
def create_budget(payload: BudgetPayload, db: DbSession, _current_user: CurrentUser) -> BudgetResponse:
    budget = budget_service.create_budget(db, payload)
    return BudgetResponse.model_validate(budget)


@router.get(
    "/{budget_id}",
    response_model=BudgetResponse,
    summary="Detail anggaran",
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_budget(budget_id: BudgetId, db: DbSession, _current_user: CurrentUser) -> BudgetResponse:
    return BudgetResponse.model_validate(budget_service.get_budget(db, budget_id))


@router.put(
    "/{budget_id}",
    response_model=BudgetResponse,
    summary="Ubah anggaran",
    responses=_WRITE_ERRORS,
)
def update_budget(
    budget_id: BudgetId, payload: BudgetPayload, db: DbSession, _current_user: CurrentUser
) -> BudgetResponse:
    budget = budget_service.update_budget(db, budget_id, payload)
    return BudgetResponse.model_validate(budget)


@router.delete(
    "/{budget_id}",
    response_model=DeleteResponse,
    summary="Hapus anggaran",
    description="Ditolak (400) untuk anggaran berstatus ``spent`` yang sudah terpakai.",
    responses=_WRITE_ERRORS,
)
def delete_budget(budget_id: BudgetId, db: DbSession, _current_user: CurrentUser) -> DeleteResponse:
    budget_service.delete_budget(db, budget_id)
    return DeleteResponse(message="Anggaran berhasil dihapus", deleted_id=budget_id)
