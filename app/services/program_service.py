"""
Program and sub-program service layer.

Backs ``/api/programs``, ``/api/sub-programs`` and the program / project
dropdowns under ``/api/master``. Mutations follow the guard order of
``master_data_service``: required fields, existence, referenced rows,
vocabularies, dates, then for deletes the dependent-record check.

Deleting a program always removes its stakeholder links. Sub-programs,
activities and budgets block the delete unless ``force`` is set, in which
case they are removed in the same transaction.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.activity import Activity
from app.models.budget import Budget
from app.models.category_program import CategoryProgram
from app.models.department import Department
from app.models.program import Program
from app.models.program_stakeholder import ProgramStakeholder
from app.models.sub_program import SubProgram
from app.models.type_program import TypeProgram
from app.models.user import User
from app.schemas.common import PageMeta, PaginationParams, SortParams
from app.schemas.program import (
    ProgramCounts,
    ProgramListItem,
    ProgramOption,
    ProgramPayload,
    SubProgramCounts,
    SubProgramListItem,
    SubProgramOption,
    SubProgramPayload,
)
from app.services.listing import apply_filters, apply_search, apply_sort, count_by, paginate
from app.services.master_data_service import (
    count_references,
    delete_matching,
    ensure_choice,
    ensure_date_order,
    ensure_no_dependents,
    ensure_percentage,
    ensure_reference,
    get_or_404,
    optional_text,
    require_id,
    require_text,
)
from app.utils.constants import (
    DEFAULT_PRIORITY,
    PRIORITIES,
    PROGRAM_DEFAULT_STATUS,
    PROGRAM_SELECTABLE_STATUSES,
    PROGRAM_STATUSES,
    SUB_PROGRAM_SELECTABLE_STATUSES,
    SUB_PROGRAM_STATUSES,
)
from app.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

_PROGRAM_NOT_FOUND = "Program tidak ditemukan"
_SUB_PROGRAM_NOT_FOUND = "Sub program tidak ditemukan"

PROGRAM_REFERENCES: dict[str, Any] = {
    "Sub program": SubProgram.program_id,
    "Activity": Activity.program_id,
    "Budget": Budget.program_id,
}

SUB_PROGRAM_REFERENCES: dict[str, Any] = {
    "Activity": Activity.sub_program_id,
    "Budget": Budget.sub_program_id,
}

PROGRAM_SORT_COLUMNS: dict[str, Any] = {
    "name": Program.name,
    "status": Program.status,
    "priority": Program.priority,
    "start_date": Program.start_date,
    "end_date": Program.end_date,
    "target_beneficiary": Program.target_beneficiary,
    "created_at": Program.created_at,
    "updated_at": Program.updated_at,
    "category": CategoryProgram.name,
    "type": TypeProgram.name,
    "department": Department.name,
}

SUB_PROGRAM_SORT_COLUMNS: dict[str, Any] = {
    "name": SubProgram.name,
    "status": SubProgram.status,
    "progress": SubProgram.progress,
    "start_date": SubProgram.start_date,
    "end_date": SubProgram.end_date,
    "created_at": SubProgram.created_at,
    "updated_at": SubProgram.updated_at,
    "program": Program.name,
}


def _program_counts(db: Session, ids: list[int]) -> dict[int, ProgramCounts]:
    sub_programs = count_by(db, SubProgram.program_id, ids)
    activities = count_by(db, Activity.program_id, ids)
    budgets = count_by(db, Budget.program_id, ids)
    stakeholders = count_by(db, ProgramStakeholder.program_id, ids)
    return {
        program_id: ProgramCounts(
            sub_programs=sub_programs.get(program_id, 0),
            activities=activities.get(program_id, 0),
            budgets=budgets.get(program_id, 0),
            stakeholders=stakeholders.get(program_id, 0),
        )
        for program_id in ids
    }


def _sub_program_counts(db: Session, ids: list[int]) -> dict[int, SubProgramCounts]:
    activities = count_by(db, Activity.sub_program_id, ids)
    budgets = count_by(db, Budget.sub_program_id, ids)
    return {
        sub_program_id: SubProgramCounts(
            activities=activities.get(sub_program_id, 0),
            budgets=budgets.get(sub_program_id, 0),
        )
        for sub_program_id in ids
    }


# ---------------------------------------------------------------------------
# Program
# ---------------------------------------------------------------------------


def list_programs(
    db: Session,
    pagination: PaginationParams,
    sort: SortParams,
    search: str | None = None,
    category_id: int | None = None,
    type_id: int | None = None,
    status: str | None = None,
    department_id: int | None = None,
) -> tuple[list[ProgramListItem], PageMeta]:
    q = (
        db.query(Program)
        .outerjoin(CategoryProgram, Program.category_id == CategoryProgram.id)
        .outerjoin(TypeProgram, Program.type_id == TypeProgram.id)
        .outerjoin(Department, Program.department_id == Department.id)
    )
    q = apply_search(q, search, [Program.name, Program.description, Program.target_area])
    q = apply_filters(
        q,
        {
            Program.category_id: category_id,
            Program.type_id: type_id,
            Program.status: status,
            Program.department_id: department_id,
        },
    )
    q = apply_sort(q, sort, PROGRAM_SORT_COLUMNS, Program.created_at)
    programs, meta = paginate(q, pagination)

    counts = _program_counts(db, [p.id for p in programs])
    items = []
    for program in programs:
        item = ProgramListItem.model_validate(program)
        item.counts = counts[program.id]
        items.append(item)
    return items, meta


def get_program(db: Session, program_id: int) -> ProgramListItem:
    program = get_or_404(db, Program, program_id, _PROGRAM_NOT_FOUND)
    item = ProgramListItem.model_validate(program)
    item.counts = _program_counts(db, [program_id])[program_id]
    return item


def _validate_program_references(db: Session, data: dict[str, Any]) -> None:
    ensure_reference(db, CategoryProgram, data.get("category_id"), "Kategori program tidak ditemukan")
    ensure_reference(db, TypeProgram, data.get("type_id"), "Tipe program tidak ditemukan")
    ensure_reference(db, Department, data.get("department_id"), "Departemen tidak ditemukan")
    ensure_choice(data.get("status"), PROGRAM_STATUSES, "Status program")
    ensure_choice(data.get("priority"), PRIORITIES, "Prioritas")


def create_program(db: Session, payload: ProgramPayload, created_by: User) -> Program:
    """Create a draft program owned by *created_by*.

    Raises:
        ValidationError: Missing required field, unknown category, type or
            department, invalid priority, or end date not after start date.
    """
    name = require_text(payload.name, "Nama program wajib diisi")
    missing = "Kategori, tipe, departemen, tanggal mulai dan tanggal selesai wajib diisi"
    category_id = require_id(payload.category_id, missing)
    type_id = require_id(payload.type_id, missing)
    department_id = require_id(payload.department_id, missing)
    if payload.start_date is None or payload.end_date is None:
        raise ValidationError(missing)

    _validate_program_references(
        db,
        {
            "category_id": category_id,
            "type_id": type_id,
            "department_id": department_id,
            "priority": payload.priority,
        },
    )
    ensure_date_order(payload.start_date, payload.end_date)

    program = Program(
        name=name,
        description=optional_text(payload.description),
        category_id=category_id,
        type_id=type_id,
        department_id=department_id,
        status=PROGRAM_DEFAULT_STATUS,
        priority=payload.priority or DEFAULT_PRIORITY,
        start_date=payload.start_date,
        end_date=payload.end_date,
        target_beneficiary=payload.target_beneficiary,
        target_area=optional_text(payload.target_area),
        created_by_id=created_by.id,
    )
    db.add(program)
    db.commit()
    db.refresh(program)
    logger.info("Created program id=%s by user id=%s", program.id, created_by.id)
    return program


def update_program(db: Session, program_id: int, payload: ProgramPayload) -> Program:
    """Apply the fields present in *payload*; omitted fields are kept."""
    data = payload.model_dump(exclude_unset=True)
    if "name" in data:
        data["name"] = require_text(data["name"], "Nama program wajib diisi")
    program = get_or_404(db, Program, program_id, _PROGRAM_NOT_FOUND)

    for field in ("category_id", "type_id", "department_id", "status", "priority"):
        if field in data and data[field] is None:
            raise ValidationError(f"{field} tidak boleh kosong")
    _validate_program_references(db, data)
    ensure_date_order(
        data.get("start_date", program.start_date), data.get("end_date", program.end_date)
    )

    for field in ("description", "target_area"):
        if field in data:
            data[field] = optional_text(data[field])
    for field, value in data.items():
        setattr(program, field, value)
    db.commit()
    db.refresh(program)
    return program


def delete_program(db: Session, program_id: int, force: bool = False) -> None:
    program = get_or_404(db, Program, program_id, _PROGRAM_NOT_FOUND)
    counts = count_references(db, PROGRAM_REFERENCES, program_id)
    if not force:
        ensure_no_dependents(
            counts,
            "Program memiliki data terkait yang harus dihapus terlebih dahulu",
            "Program ini terkait dengan:",
        )

    sub_program_ids = [
        row.id for row in db.query(SubProgram.id).filter(SubProgram.program_id == program_id)
    ]
    delete_matching(
        db.query(Activity).filter(
            or_(Activity.program_id == program_id, Activity.sub_program_id.in_(sub_program_ids))
        )
    )
    delete_matching(
        db.query(Budget).filter(
            or_(Budget.program_id == program_id, Budget.sub_program_id.in_(sub_program_ids))
        )
    )
    delete_matching(db.query(SubProgram).filter(SubProgram.program_id == program_id))
    delete_matching(db.query(ProgramStakeholder).filter(ProgramStakeholder.program_id == program_id))
    db.delete(program)
    db.commit()
    logger.info("Deleted program id=%s force=%s related=%s", program_id, force, counts)


def list_program_options(db: Session) -> list[ProgramOption]:
    """Approved and active programs, by name, for the dropdowns of other forms."""
    programs = (
        db.query(Program)
        .filter(Program.status.in_(PROGRAM_SELECTABLE_STATUSES))
        .order_by(Program.name)
        .all()
    )
    counts = _program_counts(db, [p.id for p in programs])
    options = []
    for program in programs:
        option = ProgramOption.model_validate(program)
        option.counts = counts[program.id]
        options.append(option)
    return options


# ---------------------------------------------------------------------------
# SubProgram
# ---------------------------------------------------------------------------


def list_sub_programs(
    db: Session,
    pagination: PaginationParams,
    sort: SortParams,
    search: str | None = None,
    program_id: int | None = None,
    status: str | None = None,
) -> tuple[list[SubProgramListItem], PageMeta]:
    q = db.query(SubProgram).outerjoin(Program, SubProgram.program_id == Program.id)
    q = apply_search(q, search, [SubProgram.name, SubProgram.description])
    q = apply_filters(q, {SubProgram.program_id: program_id, SubProgram.status: status})
    q = apply_sort(q, sort, SUB_PROGRAM_SORT_COLUMNS, SubProgram.created_at)
    sub_programs, meta = paginate(q, pagination)

    counts = _sub_program_counts(db, [s.id for s in sub_programs])
    items = []
    for sub_program in sub_programs:
        item = SubProgramListItem.model_validate(sub_program)
        item.counts = counts[sub_program.id]
        items.append(item)
    return items, meta


def get_sub_program(db: Session, sub_program_id: int) -> SubProgramListItem:
    sub_program = get_or_404(db, SubProgram, sub_program_id, _SUB_PROGRAM_NOT_FOUND)
    item = SubProgramListItem.model_validate(sub_program)
    item.counts = _sub_program_counts(db, [sub_program_id])[sub_program_id]
    return item


def create_sub_program(db: Session, payload: SubProgramPayload) -> SubProgram:
    name = require_text(payload.name, "Nama sub program wajib diisi")
    missing = "Program, tanggal mulai dan tanggal selesai wajib diisi"
    program_id = require_id(payload.program_id, missing)
    if payload.start_date is None or payload.end_date is None:
        raise ValidationError(missing)

    ensure_reference(db, Program, program_id, _PROGRAM_NOT_FOUND)
    ensure_choice(payload.status, SUB_PROGRAM_STATUSES, "Status sub program")
    ensure_date_order(payload.start_date, payload.end_date)
    ensure_percentage(payload.progress)

    sub_program = SubProgram(
        name=name,
        description=optional_text(payload.description),
        program_id=program_id,
        status=payload.status or SUB_PROGRAM_STATUSES[0],
        progress=payload.progress or 0,
        budget=payload.budget,
        actual_cost=payload.actual_cost,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )
    db.add(sub_program)
    db.commit()
    db.refresh(sub_program)
    logger.info("Created sub_program id=%s program_id=%s", sub_program.id, program_id)
    return sub_program


def update_sub_program(
    db: Session, sub_program_id: int, payload: SubProgramPayload
) -> SubProgram:
    data = payload.model_dump(exclude_unset=True)
    if "name" in data:
        data["name"] = require_text(data["name"], "Nama sub program wajib diisi")
    sub_program = get_or_404(db, SubProgram, sub_program_id, _SUB_PROGRAM_NOT_FOUND)

    for field in ("program_id", "status", "progress"):
        if field in data and data[field] is None:
            raise ValidationError(f"{field} tidak boleh kosong")
    ensure_reference(db, Program, data.get("program_id"), _PROGRAM_NOT_FOUND)
    ensure_choice(data.get("status"), SUB_PROGRAM_STATUSES, "Status sub program")
    ensure_date_order(
        data.get("start_date", sub_program.start_date),
        data.get("end_date", sub_program.end_date),
    )
    ensure_percentage(data.get("progress"))

    if "description" in data:
        data["description"] = optional_text(data["description"])
    for field, value in data.items():
        setattr(sub_program, field, value)
    db.commit()
    db.refresh(sub_program)
    return sub_program


def delete_sub_program(db: Session, sub_program_id: int, force: bool = False) -> None:
    sub_program = get_or_404(db, SubProgram, sub_program_id, _SUB_PROGRAM_NOT_FOUND)
    counts = count_references(db, SUB_PROGRAM_REFERENCES, sub_program_id)
    if not force:
        ensure_no_dependents(
            counts,
            "Tidak dapat menghapus sub program yang masih memiliki aktivitas atau anggaran terkait",
            "Sub program ini terkait dengan:",
        )

    delete_matching(db.query(Activity).filter(Activity.sub_program_id == sub_program_id))
    delete_matching(db.query(Budget).filter(Budget.sub_program_id == sub_program_id))
    db.delete(sub_program)
    db.commit()
    logger.info("Deleted sub_program id=%s force=%s related=%s", sub_program_id, force, counts)


def list_sub_program_options(db: Session) -> list[SubProgramOption]:
    """Planned and active sub-programs, by name, for the activity and budget forms."""
    sub_programs = (
        db.query(SubProgram)
        .filter(SubProgram.status.in_(SUB_PROGRAM_SELECTABLE_STATUSES))
        .order_by(SubProgram.name)
        .all()
    )
    counts = _sub_program_counts(db, [s.id for s in sub_programs])
    options = []
    for sub_program in sub_programs:
        option = SubProgramOption.model_validate(sub_program)
        option.counts = counts[sub_program.id]
        options.append(option)
    return options


def resolve_program_scope(
    db: Session, program_id: int | None, sub_program_id: int | None
) -> int | None:
    """Check the program / sub-program pair of an activity or budget.

    Returns the effective program id: when only a sub-program is given, its
    parent program.

    Raises:
        ValidationError: Unknown program or sub-program, or a sub-program
            that belongs to another program.
    """
    ensure_reference(db, Program, program_id, _PROGRAM_NOT_FOUND)
    if sub_program_id is None:
        return program_id
    sub_program = db.get(SubProgram, sub_program_id)
    if sub_program is None:
        raise ValidationError(_SUB_PROGRAM_NOT_FOUND)
    if program_id is None:
        return sub_program.program_id
    if sub_program.program_id != program_id:
        raise ValidationError("Sub program tidak termasuk dalam program yang dipilih")
    return program_id
