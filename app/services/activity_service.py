"""
Activity service layer.

An activity always belongs to a program and may be narrowed to one of that
program's sub-programs. Nothing references an activity, so deletes are
never blocked.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.models.activity import Activity
from app.models.department import Department
from app.models.program import Program
from app.models.user import User
from app.schemas.activity import ActivityPayload
from app.schemas.common import PageMeta, PaginationParams, SortParams
from app.services.listing import apply_filters, apply_search, apply_sort, paginate
from app.services.master_data_service import (
    delete_record,
    ensure_choice,
    ensure_date_order,
    ensure_percentage,
    ensure_reference,
    get_or_404,
    optional_text,
    require_id,
    require_text,
)
from app.services.program_service import resolve_program_scope
from app.utils.constants import ACTIVITY_STATUSES, ACTIVITY_TYPES, DEFAULT_PRIORITY, PRIORITIES
from app.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

_NOT_FOUND = "Aktivitas tidak ditemukan"

ACTIVITY_SORT_COLUMNS: dict[str, Any] = {
    "name": Activity.name,
    "type": Activity.type,
    "status": Activity.status,
    "priority": Activity.priority,
    "progress": Activity.progress,
    "start_date": Activity.start_date,
    "end_date": Activity.end_date,
    "created_at": Activity.created_at,
    "updated_at": Activity.updated_at,
    "program": Program.name,
    "department": Department.name,
}


def list_activities(
    db: Session,
    pagination: PaginationParams,
    sort: SortParams,
    search: str | None = None,
    program_id: int | None = None,
    sub_program_id: int | None = None,
    department_id: int | None = None,
    type: str | None = None,
    status: str | None = None,
    priority: str | None = None,
) -> tuple[list[Activity], PageMeta]:
    q = (
        db.query(Activity)
        .outerjoin(Program, Activity.program_id == Program.id)
        .outerjoin(Department, Activity.department_id == Department.id)
    )
    q = apply_search(q, search, [Activity.name, Activity.description, Activity.location])
    q = apply_filters(
        q,
        {
            Activity.program_id: program_id,
            Activity.sub_program_id: sub_program_id,
            Activity.department_id: department_id,
            Activity.type: type,
            Activity.status: status,
            Activity.priority: priority,
        },
    )
    q = apply_sort(q, sort, ACTIVITY_SORT_COLUMNS, Activity.created_at)
    return paginate(q, pagination)


def get_activity(db: Session, activity_id: int) -> Activity:
    return get_or_404(db, Activity, activity_id, _NOT_FOUND)


def _validate(db: Session, data: dict[str, Any]) -> None:
    ensure_reference(db, Department, data.get("department_id"), "Departemen tidak ditemukan")
    ensure_reference(db, User, data.get("assigned_to_id"), "User tidak ditemukan")
    ensure_choice(data.get("type"), ACTIVITY_TYPES, "Tipe aktivitas")
    ensure_choice(data.get("status"), ACTIVITY_STATUSES, "Status aktivitas")
    ensure_choice(data.get("priority"), PRIORITIES, "Prioritas")
    ensure_percentage(data.get("progress"))


def create_activity(db: Session, payload: ActivityPayload) -> Activity:
    """Create a planned activity.

    Raises:
        ValidationError: Missing required field, unknown reference, a
            sub-program outside the program, invalid vocabulary value,
            progress out of range, or end date not after start date.
    """
    name = require_text(payload.name, "Nama aktivitas wajib diisi")
    missing = "Tipe, program, departemen, tanggal mulai dan tanggal selesai wajib diisi"
    activity_type = require_text(payload.type, missing)
    program_id = require_id(payload.program_id, missing)
    department_id = require_id(payload.department_id, missing)
    if payload.start_date is None or payload.end_date is None:
        raise ValidationError(missing)

    resolve_program_scope(db, program_id, payload.sub_program_id)
    data = payload.model_dump()
    data["type"] = activity_type
    _validate(db, data)
    ensure_date_order(payload.start_date, payload.end_date)

    activity = Activity(
        name=name,
        description=optional_text(payload.description),
        type=activity_type,
        status=payload.status or ACTIVITY_STATUSES[0],
        priority=payload.priority or DEFAULT_PRIORITY,
        progress=payload.progress or 0,
        location=optional_text(payload.location),
        participants=payload.participants,
        budget=payload.budget,
        actual_cost=payload.actual_cost,
        start_date=payload.start_date,
        end_date=payload.end_date,
        program_id=program_id,
        sub_program_id=payload.sub_program_id,
        department_id=department_id,
        assigned_to_id=payload.assigned_to_id,
    )
    db.add(activity)
    db.commit()
    db.refresh(activity)
    logger.info("Created activity id=%s program_id=%s", activity.id, program_id)
    return activity


def update_activity(db: Session, activity_id: int, payload: ActivityPayload) -> Activity:
    """Apply the fields present in *payload*; omitted fields are kept."""
    data = payload.model_dump(exclude_unset=True)
    if "name" in data:
        data["name"] = require_text(data["name"], "Nama aktivitas wajib diisi")
    activity = get_or_404(db, Activity, activity_id, _NOT_FOUND)

    for field in ("type", "program_id", "department_id", "status", "priority", "progress"):
        if field in data and data[field] is None:
            raise ValidationError(f"{field} tidak boleh kosong")
    if "program_id" in data or "sub_program_id" in data:
        resolve_program_scope(
            db,
            data.get("program_id", activity.program_id),
            data.get("sub_program_id", activity.sub_program_id),
        )
    _validate(db, data)
    ensure_date_order(
        data.get("start_date", activity.start_date), data.get("end_date", activity.end_date)
    )

    for field in ("description", "location"):
        if field in data:
            data[field] = optional_text(data[field])
    for field, value in data.items():
        setattr(activity, field, value)
    db.commit()
    db.refresh(activity)
    return activity


def delete_activity(db: Session, activity_id: int) -> None:
    activity = get_or_404(db, Activity, activity_id, _NOT_FOUND)
    delete_record(db, activity)
    logger.info("Deleted activity id=%s", activity_id)
