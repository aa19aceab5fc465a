"""
Pydantic v2 schemas for stakeholders.

Category maintenance schemas live in ``app.schemas.master_data``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.user import UserRef
from app.utils.constants import STAKEHOLDER_LEVELS, STAKEHOLDER_RELATIONSHIPS, STAKEHOLDER_TYPES


class StakeholderPayload(BaseModel):
    """Body of ``POST /api/stakeholders`` and ``PUT /api/stakeholders/{id}``.

    Attributes:
        name: Required on create.
        type: Required on create.
        category_id: FK to StakeholderCategory (required on create).
        importance, influence: Default ``"medium"``.
        relationship: Defaults to ``"neutral"``.
        contact_person_id: Internal user owning the relationship.
    """

    name: str | None = Field(default=None, max_length=200)
    type: str | None = Field(default=None, description=f"Salah satu dari {STAKEHOLDER_TYPES}")
    category_id: int | None = None
    contact: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)
    description: str | None = None
    importance: str | None = Field(default=None, description=f"Salah satu dari {STAKEHOLDER_LEVELS}")
    influence: str | None = Field(default=None, description=f"Salah satu dari {STAKEHOLDER_LEVELS}")
    relationship: str | None = Field(
        default=None, description=f"Salah satu dari {STAKEHOLDER_RELATIONSHIPS}"
    )
    contact_person_id: int | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Dinas Pendidikan Kabupaten",
                "type": "government",
                "category_id": 3,
                "contact": "Ibu Sari",
                "importance": "high",
                "influence": "high",
                "relationship": "supporter",
            }
        }
    )


class StakeholderCategoryRef(BaseModel):
    id: int
    name: str
    type: str

    model_config = ConfigDict(from_attributes=True)


class StakeholderCounts(BaseModel):
    programs: int = 0


class StakeholderResponse(BaseModel):
    id: int
    name: str
    type: str | None = None
    category_id: int | None = None
    contact: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    description: str | None = None
    importance: str
    influence: str
    relationship: str
    contact_person_id: int | None = None
    created_at: datetime
    updated_at: datetime
    category: StakeholderCategoryRef | None = None
    contact_person: UserRef | None = None

    model_config = ConfigDict(from_attributes=True)


class StakeholderListItem(StakeholderResponse):
    counts: StakeholderCounts = Field(default_factory=StakeholderCounts)
