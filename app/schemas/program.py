"""
Pydantic v2 schemas for programs and sub-programs.

Payload fields are all optional. On create the service checks the required
ones; on update only the fields present in the body are applied, so a form
may send just what changed.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.master_data import DepartmentRef, NamedRef
from app.schemas.user import UserRef
from app.utils.constants import PRIORITIES, PROGRAM_STATUSES, SUB_PROGRAM_STATUSES


# ---------------------------------------------------------------------------
# Program
# ---------------------------------------------------------------------------


class ProgramPayload(BaseModel):
    """Body of ``POST /api/programs`` and ``PUT /api/programs/{id}``.

    Attributes:
        name: Program title (required on create).
        category_id: FK to CategoryProgram (required on create).
        type_id: FK to TypeProgram (required on create).
        department_id: Owning department (required on create).
        start_date: Required on create.
        end_date: Required on create; must be after ``start_date``.
        status: New programs always start as ``"draft"``; settable on update.
        priority: Defaults to ``"medium"``.
    """

    name: str | None = Field(default=None, max_length=300)
    description: str | None = None
    category_id: int | None = None
    type_id: int | None = None
    department_id: int | None = None
    status: str | None = Field(default=None, description=f"Salah satu dari {PROGRAM_STATUSES}")
    priority: str | None = Field(default=None, description=f"Salah satu dari {PRIORITIES}")
    start_date: date | None = None
    end_date: date | None = None
    target_beneficiary: int | None = Field(default=None, ge=0)
    target_area: str | None = Field(default=None, max_length=300)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Beasiswa Anak Nelayan",
                "category_id": 1,
                "type_id": 3,
                "department_id": 1,
                "priority": "high",
                "start_date": "2024-01-01",
                "end_date": "2024-12-31",
                "target_beneficiary": 150,
                "target_area": "Kabupaten Indramayu",
            }
        }
    )


class ProgramCounts(BaseModel):
    sub_programs: int = 0
    activities: int = 0
    budgets: int = 0
    stakeholders: int = 0


class ProgramResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    status: str
    priority: str
    start_date: date | None = None
    end_date: date | None = None
    target_beneficiary: int | None = None
    target_area: str | None = None
    category_id: int | None = None
    type_id: int | None = None
    department_id: int | None = None
    created_by_id: int | None = None
    created_at: datetime
    updated_at: datetime
    category: NamedRef | None = None
    type: NamedRef | None = None
    department: DepartmentRef | None = None
    created_by: UserRef | None = None

    model_config = ConfigDict(from_attributes=True)


class ProgramListItem(ProgramResponse):
    counts: ProgramCounts = Field(default_factory=ProgramCounts)


class ProgramOption(BaseModel):
    """Program entry of the dropdown used by the sub-program, activity and budget forms."""

    id: int
    name: str
    status: str
    start_date: date | None = None
    end_date: date | None = None
    category: NamedRef | None = None
    counts: ProgramCounts = Field(default_factory=ProgramCounts)

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# SubProgram
# ---------------------------------------------------------------------------


class SubProgramPayload(BaseModel):
    """Body of ``POST /api/sub-programs`` and ``PUT /api/sub-programs/{id}``.

    Attributes:
        name: Required on create.
        program_id: Parent program (required on create).
        start_date: Required on create.
        end_date: Required on create; must be after ``start_date``.
        progress: Percentage between 0 and 100.
    """

    name: str | None = Field(default=None, max_length=300)
    description: str | None = None
    program_id: int | None = None
    status: str | None = Field(default=None, description=f"Salah satu dari {SUB_PROGRAM_STATUSES}")
    progress: float | None = None
    budget: float | None = None
    actual_cost: float | None = None
    start_date: date | None = None
    end_date: date | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Pendampingan Belajar",
                "program_id": 1,
                "start_date": "2024-02-01",
                "end_date": "2024-06-30",
                "budget": 25000000,
            }
        }
    )


class SubProgramCounts(BaseModel):
    activities: int = 0
    budgets: int = 0


class SubProgramResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    program_id: int
    status: str
    progress: float
    budget: float | None = None
    actual_cost: float | None = None
    start_date: date | None = None
    end_date: date | None = None
    created_at: datetime
    updated_at: datetime
    program: NamedRef | None = None

    model_config = ConfigDict(from_attributes=True)


class SubProgramListItem(SubProgramResponse):
    counts: SubProgramCounts = Field(default_factory=SubProgramCounts)


class SubProgramOption(BaseModel):
    """Sub-program entry of the dropdown used by the activity and budget forms."""

    id: int
    name: str
    status: str
    progress: float
    start_date: date | None = None
    end_date: date | None = None
    program: NamedRef | None = None
    counts: SubProgramCounts = Field(default_factory=SubProgramCounts)

    model_config = ConfigDict(from_attributes=True)
