"""
Master Data service layer.

All database access for the reference-data endpoints (departments,
program categories, program types, stakeholder categories, roles) lives
here, together with the guard helpers every mutation goes through.

Guard order for mutations
-------------------------
1. Required fields present and non-blank, else ``ValidationError`` (400).
2. Target exists (update/delete), else ``NotFoundError`` (404).
3. Unique field not taken by another row, else ``ConflictError`` (400).
4. Delete only: no referencing rows, else ``DependencyError`` (400) with a
   per-relation count summary.

The uniqueness pre-check produces the friendly message; the database unique
constraint stays the source of truth, and an ``IntegrityError`` raised on
commit is translated into the same ``ConflictError``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from app.models.activity import Activity
from app.models.budget import Budget
from app.models.category_program import CategoryProgram
from app.models.department import Department
from app.models.program import Program
from app.models.role import Role
from app.models.stakeholder import Stakeholder
from app.models.stakeholder_category import StakeholderCategory
from app.models.type_program import TypeProgram
from app.models.user import User
from app.schemas.master_data import (
    DepartmentCounts,
    DepartmentListItem,
    DepartmentPayload,
    DepartmentRef,
    RoleResponse,
    StakeholderCategoryListItem,
    StakeholderCategoryPayload,
)
from app.utils.exceptions import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Guard helpers
# ---------------------------------------------------------------------------


def require_text(value: str | None, message: str) -> str:
    """Return *value* stripped, or raise ``ValidationError`` if blank."""
    if value is None or not value.strip():
        raise ValidationError(message)
    return value.strip()


def require_id(value: int | None, message: str) -> int:
    if value is None:
        raise ValidationError(message)
    return value


def optional_text(value: str | None) -> str | None:
    """Strip *value*; blank strings become ``None``."""
    if value is None:
        return None
    return value.strip() or None


def get_or_404(db: Session, model: Any, record_id: int, message: str) -> Any:
    instance = db.get(model, record_id)
    if instance is None:
        raise NotFoundError(message)
    return instance


def ensure_unique(
    db: Session,
    column: Any,
    value: Any,
    message: str,
    exclude_id: int | None = None,
) -> None:
    """Raise ``ConflictError`` if another row already holds *value* in *column*.

    Args:
        column: Mapped column, e.g. ``CategoryProgram.name``.
        exclude_id: Primary key of the row being updated, so it does not
            collide with itself.
    """
    model = column.class_
    q = db.query(model.id).filter(column == value)
    if exclude_id is not None:
        q = q.filter(model.id != exclude_id)
    if q.first() is not None:
        raise ConflictError(message)


def ensure_reference(db: Session, model: Any, record_id: int | None, message: str) -> None:
    """Raise ``ValidationError`` when *record_id* is set but no such row exists."""
    if record_id is not None and db.get(model, record_id) is None:
        raise ValidationError(message)


def ensure_choice(value: str | None, choices: list[str], label: str) -> None:
    if value is not None and value not in choices:
        raise ValidationError(f"{label} harus salah satu dari: {', '.join(choices)}")


def ensure_date_order(start: date | None, end: date | None) -> None:
    if start is not None and end is not None and start >= end:
        raise ValidationError("End date must be after start date")


def ensure_percentage(value: float | None) -> None:
    if value is not None and not 0 <= value <= 100:
        raise ValidationError("Progress must be between 0 and 100")


def count_references(
    db: Session, foreign_keys: dict[str, Any], target_id: int
) -> dict[str, int]:
    """Count rows pointing at *target_id* through each foreign-key column.

    Args:
        foreign_keys: Label to FK column, e.g. ``{"Program": Program.type_id}``.

    Returns:
        Label to count, in the same order as *foreign_keys*.
    """
    counts: dict[str, int] = {}
    for label, fk_column in foreign_keys.items():
        counts[label] = (
            db.query(func.count()).select_from(fk_column.class_)
            .filter(fk_column == target_id)
            .scalar()
            or 0
        )
    return counts


def ensure_no_dependents(counts: dict[str, int], message: str, subject: str) -> None:
    """Raise ``DependencyError`` when any count is positive.

    The ``details`` string reads ``"<subject> <n> <label>, ..."``, listing
    only the non-zero relations.
    """
    in_use = [f"{n} {label}" for label, n in counts.items() if n > 0]
    if in_use:
        raise DependencyError(message, details=f"{subject} {', '.join(in_use)}")


def commit_or_conflict(db: Session, message: str) -> None:
    """Commit, translating a unique-constraint violation into ``ConflictError``."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("Unique constraint rejected write: %s", exc.orig)
        raise ConflictError(message) from exc


def delete_record(db: Session, instance: Any) -> None:
    db.delete(instance)
    db.commit()


def delete_matching(query: Query) -> None:
    """Mark every row of *query* for deletion in the current unit of work."""
    for instance in query.all():
        query.session.delete(instance)


# ---------------------------------------------------------------------------
# Name-keyed entities (program categories and types)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NamedEntityConfig:
    """Model and user-facing messages for a name-only master entity."""

    model: Any
    program_fk: Any
    required: str
    not_found: str
    duplicate: str
    in_use: str
    in_use_subject: str
    deleted: str


CATEGORY_PROGRAM = NamedEntityConfig(
    model=CategoryProgram,
    program_fk=Program.category_id,
    required="Nama kategori wajib diisi",
    not_found="Kategori tidak ditemukan",
    duplicate="Kategori dengan nama tersebut sudah ada",
    in_use="Tidak dapat menghapus kategori yang sedang digunakan oleh program",
    in_use_subject="Kategori ini digunakan oleh",
    deleted="Kategori berhasil dihapus",
)

TYPE_PROGRAM = NamedEntityConfig(
    model=TypeProgram,
    program_fk=Program.type_id,
    required="Nama tipe program wajib diisi",
    not_found="Tipe program tidak ditemukan",
    duplicate="Tipe program dengan nama tersebut sudah ada",
    in_use="Tidak dapat menghapus tipe program yang sedang digunakan oleh program",
    in_use_subject="Tipe program ini digunakan oleh",
    deleted="Tipe program berhasil dihapus",
)


def list_named(db: Session, cfg: NamedEntityConfig) -> list[Any]:
    rows = db.query(cfg.model).order_by(cfg.model.name).all()
    logger.debug("list %s: %d records", cfg.model.__tablename__, len(rows))
    return rows


def create_named(db: Session, cfg: NamedEntityConfig, name: str | None) -> Any:
    name = require_text(name, cfg.required)
    ensure_unique(db, cfg.model.name, name, cfg.duplicate)

    instance = cfg.model(name=name)
    db.add(instance)
    commit_or_conflict(db, cfg.duplicate)
    db.refresh(instance)
    logger.info("Created %s id=%s name='%s'", cfg.model.__tablename__, instance.id, name)
    return instance


def update_named(
    db: Session, cfg: NamedEntityConfig, record_id: int, name: str | None
) -> Any:
    name = require_text(name, cfg.required)
    instance = get_or_404(db, cfg.model, record_id, cfg.not_found)
    ensure_unique(db, cfg.model.name, name, cfg.duplicate, exclude_id=record_id)

    instance.name = name
    commit_or_conflict(db, cfg.duplicate)
    db.refresh(instance)
    return instance


def delete_named(db: Session, cfg: NamedEntityConfig, record_id: int) -> None:
    instance = get_or_404(db, cfg.model, record_id, cfg.not_found)
    counts = count_references(db, {"program": cfg.program_fk}, record_id)
    ensure_no_dependents(counts, cfg.in_use, cfg.in_use_subject)

    delete_record(db, instance)
    logger.info("Deleted %s id=%s", cfg.model.__tablename__, record_id)


# ---------------------------------------------------------------------------
# Department
# ---------------------------------------------------------------------------

DEPARTMENT_REFERENCES: dict[str, Any] = {
    "User": User.department_id,
    "Program": Program.department_id,
    "Activity": Activity.department_id,
    "Budget": Budget.department_id,
    "Sub-departemen": Department.parent_id,
}

_DEPARTMENT_NOT_FOUND = "Departemen tidak ditemukan"
_DEPARTMENT_DUPLICATE = "Departemen dengan kode tersebut sudah ada"


def _department_counts(db: Session) -> dict[int, DepartmentCounts]:
    """Per-department usage counts, one grouped query per relation."""
    fields = {
        "users": User.department_id,
        "programs": Program.department_id,
        "activities": Activity.department_id,
        "budgets": Budget.department_id,
        "children": Department.parent_id,
    }
    result: dict[int, dict[str, int]] = {}
    for field, fk_column in fields.items():
        rows = (
            db.query(fk_column, func.count())
            .select_from(fk_column.class_)
            .filter(fk_column.isnot(None))
            .group_by(fk_column)
            .all()
        )
        for department_id, count in rows:
            result.setdefault(department_id, {})[field] = count
    return {dept_id: DepartmentCounts(**values) for dept_id, values in result.items()}


def list_departments(db: Session) -> list[DepartmentListItem]:
    departments = db.query(Department).order_by(Department.name).all()
    counts = _department_counts(db)
    logger.debug("list_departments: %d records", len(departments))

    return [
        DepartmentListItem(
            id=d.id,
            name=d.name,
            code=d.code,
            description=d.description,
            parent_id=d.parent_id,
            created_at=d.created_at,
            updated_at=d.updated_at,
            parent=DepartmentRef.model_validate(d.parent) if d.parent else None,
            counts=counts.get(d.id, DepartmentCounts()),
        )
        for d in departments
    ]


def _validate_parent(db: Session, parent_id: int | None, department_id: int | None) -> None:
    """Reject unknown parents and any parent that would create a cycle."""
    if parent_id is None:
        return
    if parent_id == department_id:
        raise ValidationError("Departemen tidak dapat menjadi induk dirinya sendiri")

    parent = db.get(Department, parent_id)
    if parent is None:
        raise ValidationError("Departemen induk tidak ditemukan")

    if department_id is None:
        return
    # Walk up from the proposed parent; meeting the department means a cycle.
    seen: set[int] = set()
    ancestor = parent
    while ancestor is not None and ancestor.id not in seen:
        if ancestor.parent_id == department_id:
            raise ValidationError(
                "Departemen induk tidak boleh berupa sub-departemen dari departemen ini"
            )
        seen.add(ancestor.id)
        ancestor = ancestor.parent


def create_department(db: Session, payload: DepartmentPayload) -> Department:
    name = require_text(payload.name, "Nama departemen wajib diisi")
    code = require_text(payload.code, "Kode departemen wajib diisi")
    _validate_parent(db, payload.parent_id, None)
    ensure_unique(db, Department.code, code, _DEPARTMENT_DUPLICATE)

    department = Department(
        name=name,
        code=code,
        description=optional_text(payload.description),
        parent_id=payload.parent_id,
    )
    db.add(department)
    commit_or_conflict(db, _DEPARTMENT_DUPLICATE)
    db.refresh(department)
    logger.info("Created department id=%s code='%s'", department.id, code)
    return department


def update_department(
    db: Session, department_id: int, payload: DepartmentPayload
) -> Department:
    name = require_text(payload.name, "Nama departemen wajib diisi")
    code = require_text(payload.code, "Kode departemen wajib diisi")
    department = get_or_404(db, Department, department_id, _DEPARTMENT_NOT_FOUND)
    _validate_parent(db, payload.parent_id, department_id)
    ensure_unique(db, Department.code, code, _DEPARTMENT_DUPLICATE, exclude_id=department_id)

    department.name = name
    department.code = code
    department.description = optional_text(payload.description)
    department.parent_id = payload.parent_id
    commit_or_conflict(db, _DEPARTMENT_DUPLICATE)
    db.refresh(department)
    return department


def delete_department(db: Session, department_id: int) -> None:
    department = get_or_404(db, Department, department_id, _DEPARTMENT_NOT_FOUND)
    counts = count_references(db, DEPARTMENT_REFERENCES, department_id)
    ensure_no_dependents(
        counts,
        "Tidak dapat menghapus departemen yang sedang digunakan",
        "Departemen ini terkait dengan:",
    )

    delete_record(db, department)
    logger.info("Deleted department id=%s", department_id)


# ---------------------------------------------------------------------------
# StakeholderCategory
# ---------------------------------------------------------------------------

_STAKEHOLDER_CATEGORY_NOT_FOUND = "Kategori tidak ditemukan"
_STAKEHOLDER_CATEGORY_DUPLICATE = "Kategori dengan nama tersebut sudah ada"


def list_stakeholder_categories(db: Session) -> list[StakeholderCategoryListItem]:
    rows = (
        db.query(StakeholderCategory, func.count(Stakeholder.id))
        .outerjoin(Stakeholder, Stakeholder.category_id == StakeholderCategory.id)
        .group_by(StakeholderCategory.id)
        .order_by(StakeholderCategory.name)
        .all()
    )
    logger.debug("list_stakeholder_categories: %d records", len(rows))
    return [
        StakeholderCategoryListItem(
            id=category.id,
            name=category.name,
            description=category.description,
            type=category.type,
            created_at=category.created_at,
            updated_at=category.updated_at,
            stakeholder_count=count,
        )
        for category, count in rows
    ]


def create_stakeholder_category(
    db: Session, payload: StakeholderCategoryPayload
) -> StakeholderCategory:
    name = require_text(payload.name, "Nama kategori wajib diisi")
    category_type = require_text(payload.type, "Tipe kategori wajib dipilih")
    ensure_unique(db, StakeholderCategory.name, name, _STAKEHOLDER_CATEGORY_DUPLICATE)

    category = StakeholderCategory(
        name=name,
        description=optional_text(payload.description),
        type=category_type,
    )
    db.add(category)
    commit_or_conflict(db, _STAKEHOLDER_CATEGORY_DUPLICATE)
    db.refresh(category)
    logger.info("Created stakeholder_category id=%s name='%s'", category.id, name)
    return category


def update_stakeholder_category(
    db: Session, category_id: int, payload: StakeholderCategoryPayload
) -> StakeholderCategory:
    name = require_text(payload.name, "Nama kategori wajib diisi")
    category = get_or_404(
        db, StakeholderCategory, category_id, _STAKEHOLDER_CATEGORY_NOT_FOUND
    )
    ensure_unique(
        db,
        StakeholderCategory.name,
        name,
        _STAKEHOLDER_CATEGORY_DUPLICATE,
        exclude_id=category_id,
    )

    category.name = name
    category.description = optional_text(payload.description)
    category.type = optional_text(payload.type) or category.type
    commit_or_conflict(db, _STAKEHOLDER_CATEGORY_DUPLICATE)
    db.refresh(category)
    return category


def delete_stakeholder_category(db: Session, category_id: int) -> None:
    category = get_or_404(
        db, StakeholderCategory, category_id, _STAKEHOLDER_CATEGORY_NOT_FOUND
    )
    counts = count_references(db, {"stakeholder": Stakeholder.category_id}, category_id)
    if counts["stakeholder"] > 0:
        raise DependencyError(
            "Kategori tidak dapat dihapus karena masih digunakan oleh "
            f"{counts['stakeholder']} stakeholder",
            details=f"Kategori ini digunakan oleh {counts['stakeholder']} stakeholder",
        )

    delete_record(db, category)
    logger.info("Deleted stakeholder_category id=%s", category_id)


# ---------------------------------------------------------------------------
# Role (dropdown; maintenance lives in management_service)
# ---------------------------------------------------------------------------


def decode_permissions(raw: str | None) -> list[str]:
    try:
        value = json.loads(raw or "[]")
    except ValueError:
        logger.warning("Role permissions are not valid JSON: %r", raw)
        return []
    return [str(p) for p in value] if isinstance(value, list) else []


def list_roles(db: Session) -> list[RoleResponse]:
    rows = (
        db.query(Role, func.count(User.id))
        .outerjoin(User, User.role_id == Role.id)
        .group_by(Role.id)
        .order_by(Role.name)
        .all()
    )
    return [
        RoleResponse(
            id=role.id,
            name=role.name,
            description=role.description,
            level=role.level,
            permissions=decode_permissions(role.permissions),
            user_count=count,
        )
        for role, count in rows
    ]
