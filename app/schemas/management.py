"""
Pydantic v2 schemas for role and permission management.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.utils.constants import ROLE_LEVELS


class RolePayload(BaseModel):
    """Body of ``POST`` and ``PUT /api/management/roles``.

    Attributes:
        name: Unique role name (required on create).
        level: Required on create.
        permissions: Capability ids from the permission catalogue; kept on
            update when omitted.
    """

    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    level: str | None = Field(default=None, description=f"Salah satu dari {ROLE_LEVELS}")
    permissions: list[str] | None = None


class Permission(BaseModel):
    id: str
    name: str
    category: str
    description: str


class PermissionCatalogue(BaseModel):
    """Permissions matching the filters, also grouped by category.

    Attributes:
        categories: Every category of the catalogue, filters ignored.
    """

    data: list[Permission]
    grouped: dict[str, list[Permission]]
    categories: list[str]
    total: int
