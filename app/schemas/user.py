"""
Pydantic v2 schemas for user management and the profile endpoints.

Separates write schemas (``UserPayload``, ``ProfilePayload``) from the read
schemas (``UserResponse``, ``ProfileResponse``), avoiding accidental
password exposure in API responses.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.master_data import DepartmentRef, RoleRef
from app.utils.constants import USER_STATUSES


class UserRef(BaseModel):
    """Compact user reference embedded in program, activity and stakeholder rows."""

    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserPayload(BaseModel):
    """Body of ``POST`` and ``PUT /api/master/users``.

    Attributes:
        email: Unique email address (required).
        name: Full display name (required).
        password: Plain-text password; only read on create. When omitted the
            configured ``DEFAULT_USER_PASSWORD`` is used. Always stored hashed.
        department_id: FK to Department (required on create).
        role_id: FK to Role (required on create).
        position: Optional job title.
        phone: Optional contact number.
        status: ``"active"`` or ``"inactive"``; kept on update when omitted.
    """

    email: str | None = Field(default=None, max_length=200)
    name: str | None = Field(default=None, max_length=200)
    password: str | None = Field(default=None, max_length=128)
    department_id: int | None = None
    role_id: int | None = None
    position: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=50)
    status: str | None = Field(default=None, description=f"Salah satu dari {USER_STATUSES}")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "budi@sustainesia.com",
                "name": "Budi Santoso",
                "department_id": 1,
                "role_id": 4,
                "position": "Staff",
            }
        }
    )


class UserResponse(BaseModel):
    """Public representation of a user. ``password_hash`` is excluded."""

    id: int
    name: str
    email: str
    status: str
    position: str | None = None
    phone: str | None = None
    role_id: int
    department_id: int
    last_login: datetime | None = None
    created_at: datetime
    updated_at: datetime
    role: RoleRef | None = None
    department: DepartmentRef | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileCounts(BaseModel):
    created_programs: int = 0
    assigned_activities: int = 0


class ProfileResponse(UserResponse):
    counts: ProfileCounts


class ProfilePayload(BaseModel):
    """Body of ``PUT /api/profile``.

    All fields are optional; only supplied fields change. The password is
    replaced only when both ``current_password`` and ``new_password`` are
    given and the current one matches.
    """

    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, max_length=200)
    current_password: str | None = Field(default=None, max_length=128)
    new_password: str | None = Field(default=None, max_length=128)
