"""
Pydantic v2 schemas for activities.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.master_data import DepartmentRef, NamedRef
from app.schemas.user import UserRef
from app.utils.constants import ACTIVITY_STATUSES, ACTIVITY_TYPES, PRIORITIES


class ActivityPayload(BaseModel):
    """Body of ``POST /api/activities`` and ``PUT /api/activities/{id}``.

    Attributes:
        name: Required on create.
        type: Required on create.
        program_id: Program the activity belongs to (required on create).
        sub_program_id: Optional sub-program; must belong to ``program_id``.
        department_id: Required on create.
        start_date: Required on create.
        end_date: Required on create; must be after ``start_date``.
        progress: Percentage between 0 and 100.
    """

    name: str | None = Field(default=None, max_length=300)
    description: str | None = None
    type: str | None = Field(default=None, description=f"Salah satu dari {ACTIVITY_TYPES}")
    status: str | None = Field(default=None, description=f"Salah satu dari {ACTIVITY_STATUSES}")
    priority: str | None = Field(default=None, description=f"Salah satu dari {PRIORITIES}")
    progress: float | None = None
    program_id: int | None = None
    sub_program_id: int | None = None
    department_id: int | None = None
    assigned_to_id: int | None = None
    location: str | None = Field(default=None, max_length=300)
    participants: int | None = Field(default=None, ge=0)
    budget: float | None = None
    actual_cost: float | None = None
    start_date: date | None = None
    end_date: date | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Pelatihan Guru PAUD",
                "type": "training",
                "program_id": 1,
                "department_id": 1,
                "location": "Indramayu",
                "participants": 40,
                "start_date": "2024-03-04",
                "end_date": "2024-03-06",
            }
        }
    )


class ActivityResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    type: str | None = None
    status: str
    priority: str
    progress: float
    location: str | None = None
    participants: int | None = None
    budget: float | None = None
    actual_cost: float | None = None
    start_date: date | None = None
    end_date: date | None = None
    program_id: int | None = None
    sub_program_id: int | None = None
    department_id: int | None = None
    assigned_to_id: int | None = None
    created_at: datetime
    updated_at: datetime
    program: NamedRef | None = None
    sub_program: NamedRef | None = None
    department: DepartmentRef | None = None
    assigned_to: UserRef | None = None

    model_config = ConfigDict(from_attributes=True)
