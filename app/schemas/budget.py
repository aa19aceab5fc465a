"""
Pydantic v2 schemas for budgets.

Amounts are plain floats in the API, the way the dashboard charts consume
them; the database keeps ``Numeric(18, 2)``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.master_data import DepartmentRef, NamedRef
from app.utils.constants import BUDGET_CATEGORIES, BUDGET_STATUSES, BUDGET_TYPES


class BudgetPayload(BaseModel):
    """Body of ``POST /api/budgets`` and ``PUT /api/budgets/{id}``.

    Attributes:
        name, type, category, amount, period, department_id: Required on create.
        amount: Must be greater than 0.
        approved_amount: Must not be negative.
        spent_amount: Must not be negative; defaults to 0.
        program_id: Optional program the budget funds.
        sub_program_id: Optional sub-program; must belong to ``program_id`` when both are set.
    """

    name: str | None = Field(default=None, max_length=300)
    type: str | None = Field(default=None, description=f"Salah satu dari {BUDGET_TYPES}")
    category: str | None = Field(default=None, description=f"Salah satu dari {BUDGET_CATEGORIES}")
    amount: float | None = None
    currency: str | None = Field(default=None, max_length=3)
    status: str | None = Field(default=None, description=f"Salah satu dari {BUDGET_STATUSES}")
    approved_amount: float | None = None
    spent_amount: float | None = None
    period: str | None = Field(default=None, max_length=50)
    department_id: int | None = None
    program_id: int | None = None
    sub_program_id: int | None = None
    approved_by: str | None = Field(default=None, max_length=200)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Anggaran Beasiswa 2024",
                "type": "program",
                "category": "operational",
                "amount": 150000000,
                "period": "2024",
                "department_id": 1,
                "program_id": 1,
            }
        }
    )


class BudgetResponse(BaseModel):
    id: int
    name: str
    type: str | None = None
    category: str | None = None
    amount: float
    currency: str
    status: str
    approved_amount: float | None = None
    spent_amount: float
    period: str | None = None
    approved_by: str | None = None
    approved_at: datetime | None = None
    department_id: int | None = None
    program_id: int | None = None
    sub_program_id: int | None = None
    created_at: datetime
    updated_at: datetime
    department: DepartmentRef | None = None
    program: NamedRef | None = None
    sub_program: NamedRef | None = None

    model_config = ConfigDict(from_attributes=True)
