"""
Stakeholder service layer.

Stakeholder categories are maintained in ``master_data_service``; this
module owns the stakeholders themselves. A stakeholder linked to programs
cannot be deleted unless ``force`` is set, which drops the links first.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.models.program_stakeholder import ProgramStakeholder
from app.models.stakeholder import Stakeholder
from app.models.stakeholder_category import StakeholderCategory
from app.models.user import User
from app.schemas.common import PageMeta, PaginationParams, SortParams
from app.schemas.stakeholder import StakeholderCounts, StakeholderListItem, StakeholderPayload
from app.services.listing import apply_filters, apply_search, apply_sort, count_by, paginate
from app.services.master_data_service import (
    count_references,
    delete_matching,
    ensure_choice,
    ensure_no_dependents,
    ensure_reference,
    get_or_404,
    optional_text,
    require_id,
    require_text,
)
from app.utils.constants import (
    STAKEHOLDER_LEVELS,
    STAKEHOLDER_RELATIONSHIPS,
    STAKEHOLDER_TYPES,
)
from app.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

_NOT_FOUND = "Stakeholder tidak ditemukan"

STAKEHOLDER_SORT_COLUMNS: dict[str, Any] = {
    "name": Stakeholder.name,
    "type": Stakeholder.type,
    "importance": Stakeholder.importance,
    "influence": Stakeholder.influence,
    "relationship": Stakeholder.relationship,
    "created_at": Stakeholder.created_at,
    "updated_at": Stakeholder.updated_at,
    "category": StakeholderCategory.name,
}


def _with_counts(db: Session, stakeholders: list[Stakeholder]) -> list[StakeholderListItem]:
    programs = count_by(db, ProgramStakeholder.stakeholder_id, [s.id for s in stakeholders])
    items = []
    for stakeholder in stakeholders:
        item = StakeholderListItem.model_validate(stakeholder)
        item.counts = StakeholderCounts(programs=programs.get(stakeholder.id, 0))
        items.append(item)
    return items


def list_stakeholders(
    db: Session,
    pagination: PaginationParams,
    sort: SortParams,
    search: str | None = None,
    type: str | None = None,
    category_id: int | None = None,
    relationship: str | None = None,
) -> tuple[list[StakeholderListItem], PageMeta]:
    q = db.query(Stakeholder).outerjoin(
        StakeholderCategory, Stakeholder.category_id == StakeholderCategory.id
    )
    q = apply_search(
        q,
        search,
        [
            Stakeholder.name,
            Stakeholder.email,
            Stakeholder.phone,
            Stakeholder.address,
            Stakeholder.contact,
        ],
    )
    q = apply_filters(
        q,
        {
            Stakeholder.type: type,
            Stakeholder.category_id: category_id,
            Stakeholder.relationship: relationship,
        },
    )
    q = apply_sort(q, sort, STAKEHOLDER_SORT_COLUMNS, Stakeholder.created_at)
    stakeholders, meta = paginate(q, pagination)
    return _with_counts(db, stakeholders), meta


def get_stakeholder(db: Session, stakeholder_id: int) -> StakeholderListItem:
    stakeholder = get_or_404(db, Stakeholder, stakeholder_id, _NOT_FOUND)
    return _with_counts(db, [stakeholder])[0]


def _validate(db: Session, data: dict[str, Any]) -> None:
    ensure_reference(
        db, StakeholderCategory, data.get("category_id"), "Kategori stakeholder tidak ditemukan"
    )
    ensure_reference(db, User, data.get("contact_person_id"), "User tidak ditemukan")
    ensure_choice(data.get("type"), STAKEHOLDER_TYPES, "Tipe stakeholder")
    ensure_choice(data.get("importance"), STAKEHOLDER_LEVELS, "Tingkat kepentingan")
    ensure_choice(data.get("influence"), STAKEHOLDER_LEVELS, "Tingkat pengaruh")
    ensure_choice(data.get("relationship"), STAKEHOLDER_RELATIONSHIPS, "Hubungan")


_TEXT_FIELDS = ("contact", "email", "phone", "address", "description")


def create_stakeholder(db: Session, payload: StakeholderPayload) -> Stakeholder:
    """Create a stakeholder.

    Raises:
        ValidationError: Missing name, type or category, unknown category or
            contact person, or a value outside its vocabulary.
    """
    name = require_text(payload.name, "Nama stakeholder wajib diisi")
    missing = "Tipe dan kategori stakeholder wajib diisi"
    stakeholder_type = require_text(payload.type, missing)
    category_id = require_id(payload.category_id, missing)

    data = payload.model_dump()
    data["type"] = stakeholder_type
    _validate(db, data)

    stakeholder = Stakeholder(
        name=name,
        type=stakeholder_type,
        category_id=category_id,
        importance=payload.importance or "medium",
        influence=payload.influence or "medium",
        relationship=payload.relationship or "neutral",
        contact_person_id=payload.contact_person_id,
        **{field: optional_text(data[field]) for field in _TEXT_FIELDS},
    )
    db.add(stakeholder)
    db.commit()
    db.refresh(stakeholder)
    logger.info("Created stakeholder id=%s name='%s'", stakeholder.id, name)
    return stakeholder


def update_stakeholder(
    db: Session, stakeholder_id: int, payload: StakeholderPayload
) -> Stakeholder:
    """Apply the fields present in *payload*; omitted fields are kept."""
    data = payload.model_dump(exclude_unset=True)
    if "name" in data:
        data["name"] = require_text(data["name"], "Nama stakeholder wajib diisi")
    stakeholder = get_or_404(db, Stakeholder, stakeholder_id, _NOT_FOUND)

    for field in ("type", "category_id", "importance", "influence", "relationship"):
        if field in data and data[field] is None:
            raise ValidationError(f"{field} tidak boleh kosong")
    _validate(db, data)

    for field in _TEXT_FIELDS:
        if field in data:
            data[field] = optional_text(data[field])
    for field, value in data.items():
        setattr(stakeholder, field, value)
    db.commit()
    db.refresh(stakeholder)
    return stakeholder


def delete_stakeholder(db: Session, stakeholder_id: int, force: bool = False) -> None:
    stakeholder = get_or_404(db, Stakeholder, stakeholder_id, _NOT_FOUND)
    counts = count_references(db, {"Program": ProgramStakeholder.stakeholder_id}, stakeholder_id)
    if not force:
        ensure_no_dependents(
            counts,
            "Tidak dapat menghapus stakeholder yang masih memiliki program terkait",
            "Stakeholder ini terkait dengan:",
        )

    delete_matching(
        db.query(ProgramStakeholder).filter(ProgramStakeholder.stakeholder_id == stakeholder_id)
    )
    db.delete(stakeholder)
    db.commit()
    logger.info("Deleted stakeholder id=%s force=%s related=%s", stakeholder_id, force, counts)
