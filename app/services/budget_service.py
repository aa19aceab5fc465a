"""
Budget service layer.

A budget is owned by a department and may fund a program or one of its
sub-programs. ``approved_at`` is stamped when the status moves to
``"approved"``. Budgets that have been spent cannot be deleted until their
status changes.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from app.models.budget import Budget
from app.models.department import Department
from app.models.program import Program
from app.schemas.budget import BudgetPayload
from app.schemas.common import PageMeta, PaginationParams, SortParams
from app.services.listing import apply_filters, apply_search, apply_sort, paginate
from app.services.master_data_service import (
    delete_record,
    ensure_choice,
    ensure_reference,
    get_or_404,
    optional_text,
    require_id,
    require_text,
)
from app.services.program_service import resolve_program_scope
from app.utils.constants import (
    BUDGET_CATEGORIES,
    BUDGET_CURRENCIES,
    BUDGET_STATUSES,
    BUDGET_TYPES,
    DEFAULT_CURRENCY,
)
from app.utils.exceptions import DependencyError, ValidationError

logger = logging.getLogger(__name__)

_NOT_FOUND = "Anggaran tidak ditemukan"

BUDGET_SORT_COLUMNS: dict[str, Any] = {
    "name": Budget.name,
    "type": Budget.type,
    "category": Budget.category,
    "amount": Budget.amount,
    "status": Budget.status,
    "period": Budget.period,
    "created_at": Budget.created_at,
    "updated_at": Budget.updated_at,
    "department": Department.name,
    "program": Program.name,
}


def list_budgets(
    db: Session,
    pagination: PaginationParams,
    sort: SortParams,
    search: str | None = None,
    department_id: int | None = None,
    program_id: int | None = None,
    sub_program_id: int | None = None,
    type: str | None = None,
    category: str | None = None,
    status: str | None = None,
) -> tuple[list[Budget], PageMeta]:
    q = (
        db.query(Budget)
        .outerjoin(Department, Budget.department_id == Department.id)
        .outerjoin(Program, Budget.program_id == Program.id)
    )
    q = apply_search(q, search, [Budget.name, Budget.period])
    q = apply_filters(
        q,
        {
            Budget.department_id: department_id,
            Budget.program_id: program_id,
            Budget.sub_program_id: sub_program_id,
            Budget.type: type,
            Budget.category: category,
            Budget.status: status,
        },
    )
    q = apply_sort(q, sort, BUDGET_SORT_COLUMNS, Budget.created_at)
    return paginate(q, pagination)


def get_budget(db: Session, budget_id: int) -> Budget:
    return get_or_404(db, Budget, budget_id, _NOT_FOUND)


def _validate_amounts(data: dict[str, Any]) -> None:
    if data.get("amount") is not None and data["amount"] <= 0:
        raise ValidationError("Amount must be greater than 0")
    if data.get("approved_amount") is not None and data["approved_amount"] < 0:
        raise ValidationError("Approved amount cannot be negative")
    if data.get("spent_amount") is not None and data["spent_amount"] < 0:
        raise ValidationError("Spent amount cannot be negative")


def _validate(db: Session, data: dict[str, Any]) -> None:
    ensure_reference(db, Department, data.get("department_id"), "Departemen tidak ditemukan")
    ensure_choice(data.get("type"), BUDGET_TYPES, "Tipe anggaran")
    ensure_choice(data.get("category"), BUDGET_CATEGORIES, "Kategori anggaran")
    ensure_choice(data.get("status"), BUDGET_STATUSES, "Status anggaran")
    ensure_choice(data.get("currency"), BUDGET_CURRENCIES, "Mata uang")
    _validate_amounts(data)


def create_budget(db: Session, payload: BudgetPayload) -> Budget:
    """Create a budget, ``"proposed"`` unless another status is given.

    Raises:
        ValidationError: Missing required field, unknown reference, a
            sub-program outside the program, invalid vocabulary value or a
            non-positive amount.
    """
    name = require_text(payload.name, "Nama anggaran wajib diisi")
    missing = "Tipe, kategori, jumlah, periode dan departemen wajib diisi"
    budget_type = require_text(payload.type, missing)
    category = require_text(payload.category, missing)
    period = require_text(payload.period, missing)
    department_id = require_id(payload.department_id, missing)
    if payload.amount is None:
        raise ValidationError(missing)

    program_id = resolve_program_scope(db, payload.program_id, payload.sub_program_id)
    data = payload.model_dump()
    data.update(type=budget_type, category=category)
    _validate(db, data)

    status = payload.status or BUDGET_STATUSES[0]
    budget = Budget(
        name=name,
        type=budget_type,
        category=category,
        amount=payload.amount,
        currency=payload.currency or DEFAULT_CURRENCY,
        status=status,
        approved_amount=payload.approved_amount,
        spent_amount=payload.spent_amount or 0,
        period=period,
        department_id=department_id,
        program_id=program_id,
        sub_program_id=payload.sub_program_id,
        approved_by=optional_text(payload.approved_by),
        approved_at=datetime.now() if status == "approved" else None,
    )
    db.add(budget)
    db.commit()
    db.refresh(budget)
    logger.info("Created budget id=%s department_id=%s", budget.id, department_id)
    return budget


def update_budget(db: Session, budget_id: int, payload: BudgetPayload) -> Budget:
    """Apply the fields present in *payload*; omitted fields are kept."""
    data = payload.model_dump(exclude_unset=True)
    if "name" in data:
        data["name"] = require_text(data["name"], "Nama anggaran wajib diisi")
    budget = get_or_404(db, Budget, budget_id, _NOT_FOUND)

    for field in ("type", "category", "amount", "period", "department_id", "status", "currency"):
        if field in data and data[field] is None:
            raise ValidationError(f"{field} tidak boleh kosong")
    if "program_id" in data or "sub_program_id" in data:
        data["program_id"] = resolve_program_scope(
            db,
            data.get("program_id", budget.program_id),
            data.get("sub_program_id", budget.sub_program_id),
        )
    _validate(db, data)

    if data.get("status") == "approved" and budget.status != "approved":
        data["approved_at"] = datetime.now()
    if "approved_by" in data:
        data["approved_by"] = optional_text(data["approved_by"])
    for field, value in data.items():
        setattr(budget, field, value)
    db.commit()
    db.refresh(budget)
    return budget


def delete_budget(db: Session, budget_id: int) -> None:
    budget = get_or_404(db, Budget, budget_id, _NOT_FOUND)
    if budget.status == "spent" and (budget.spent_amount or 0) > 0:
        raise DependencyError(
            "Tidak dapat menghapus anggaran yang sudah terpakai. Ubah status terlebih dahulu.",
            details=f"Anggaran ini sudah terpakai sebesar {float(budget.spent_amount):g}",
        )
    delete_record(db, budget)
    logger.info("Deleted budget id=%s", budget_id)
