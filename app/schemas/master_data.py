"""
Pydantic v2 schemas for the Master Data module.

Request payloads keep every field optional: the route handlers check
required fields themselves so that the 400 messages match the rest of the
master-data screens. Response models enable ORM mode
(``from_attributes=True``) so that SQLAlchemy instances can be serialised
directly.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Department
# ---------------------------------------------------------------------------


class DepartmentRef(BaseModel):
    """Compact department reference embedded in other responses."""

    id: int
    name: str
    code: str

    model_config = ConfigDict(from_attributes=True)


class DepartmentPayload(BaseModel):
    """Body of ``POST`` and ``PUT /api/master/departments``.

    Attributes:
        name: Display name (required).
        code: Unique short code (required).
        description: Optional free text.
        parent_id: Optional parent department; must not be the department itself.
    """

    name: str | None = Field(default=None, max_length=200)
    code: str | None = Field(default=None, max_length=20)
    description: str | None = Field(default=None, max_length=500)
    parent_id: int | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "CSR & Community Development",
                "code": "CSR",
                "description": "Department responsible for CSR programs",
                "parent_id": None,
            }
        }
    )


class DepartmentResponse(BaseModel):
    id: int
    name: str
    code: str
    description: str | None = None
    parent_id: int | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DepartmentCounts(BaseModel):
    """Number of records referencing a department."""

    users: int = 0
    programs: int = 0
    activities: int = 0
    budgets: int = 0
    children: int = 0


class DepartmentListItem(DepartmentResponse):
    """Department row for the list screen, with its parent and usage counts."""

    parent: DepartmentRef | None = None
    counts: DepartmentCounts


# ---------------------------------------------------------------------------
# CategoryProgram / TypeProgram
# ---------------------------------------------------------------------------


class NamePayload(BaseModel):
    """Body of name-only master entities (program categories and types)."""

    name: str | None = Field(default=None, max_length=200)

    model_config = ConfigDict(json_schema_extra={"example": {"name": "Pendidikan"}})


class CategoryProgramResponse(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TypeProgramResponse(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# StakeholderCategory
# ---------------------------------------------------------------------------


class StakeholderCategoryPayload(BaseModel):
    """Body of ``POST`` and ``PUT /api/stakeholders/categories``.

    Attributes:
        name: Unique category name (required).
        description: Optional free text.
        type: Category kind (required on create; kept on update when omitted).
    """

    name: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=500)
    type: str | None = Field(default=None, max_length=50)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Pemerintah Daerah",
                "description": "Local government partners",
                "type": "government",
            }
        }
    )


class StakeholderCategoryResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    type: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StakeholderCategoryListItem(StakeholderCategoryResponse):
    stakeholder_count: int = 0


# ---------------------------------------------------------------------------
# Role
# ---------------------------------------------------------------------------


class RoleRef(BaseModel):
    """Compact role reference embedded in user responses."""

    id: int
    name: str
    level: str

    model_config = ConfigDict(from_attributes=True)


class RoleResponse(BaseModel):
    """Role row for dropdowns.

    Attributes:
        permissions: Decoded capability strings.
        user_count: Number of users holding the role.
    """

    id: int
    name: str
    description: str | None = None
    level: str
    permissions: list[str]
    user_count: int = 0


class NamedRef(BaseModel):
    """Compact ``{id, name}`` reference to a program category, type or program."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)
