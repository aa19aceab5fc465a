"""
Role and permission management.

Roles keep their capability list as a JSON-encoded string column; this
module encodes on write and decodes on read. The permission catalogue is
static and lives in ``app.utils.constants``.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.role import Role
from app.models.user import User
from app.schemas.common import PageMeta, PaginationParams, SortParams
from app.schemas.management import Permission, PermissionCatalogue, RolePayload
from app.schemas.master_data import RoleResponse
from app.services.listing import apply_filters, apply_search, apply_sort, count_by, paginate
from app.services.master_data_service import (
    commit_or_conflict,
    count_references,
    decode_permissions,
    delete_record,
    ensure_choice,
    ensure_no_dependents,
    ensure_unique,
    get_or_404,
    optional_text,
    require_text,
)
from app.utils.constants import PERMISSION_CATALOGUE, ROLE_LEVELS
from app.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

_NOT_FOUND = "Role not found"
_DUPLICATE = "Role name already exists"

ROLE_SORT_COLUMNS: dict[str, Any] = {
    "name": Role.name,
    "level": Role.level,
    "created_at": Role.created_at,
    "updated_at": Role.updated_at,
}


def _to_response(role: Role, user_count: int) -> RoleResponse:
    return RoleResponse(
        id=role.id,
        name=role.name,
        description=role.description,
        level=role.level,
        permissions=decode_permissions(role.permissions),
        user_count=user_count,
    )


def list_roles(
    db: Session,
    pagination: PaginationParams,
    sort: SortParams,
    search: str | None = None,
    level: str | None = None,
) -> tuple[list[RoleResponse], PageMeta]:
    q = apply_search(db.query(Role), search, [Role.name, Role.description])
    q = apply_filters(q, {Role.level: level})
    q = apply_sort(q, sort, ROLE_SORT_COLUMNS, Role.created_at)
    roles, meta = paginate(q, pagination)

    user_counts = count_by(db, User.role_id, [r.id for r in roles])
    return [_to_response(role, user_counts.get(role.id, 0)) for role in roles], meta


def _user_count(db: Session, role_id: int) -> int:
    return db.query(func.count(User.id)).filter(User.role_id == role_id).scalar() or 0


def create_role(db: Session, payload: RolePayload) -> RoleResponse:
    """Create a role.

    Raises:
        ValidationError: Missing name or level, or an unknown level.
        ConflictError: Another role already has the name.
    """
    name = require_text(payload.name, "Role name and level are required")
    level = require_text(payload.level, "Role name and level are required")
    ensure_choice(level, ROLE_LEVELS, "Level")
    ensure_unique(db, Role.name, name, _DUPLICATE)

    role = Role(
        name=name,
        description=optional_text(payload.description),
        level=level,
        permissions=json.dumps(payload.permissions or []),
    )
    db.add(role)
    commit_or_conflict(db, _DUPLICATE)
    db.refresh(role)
    logger.info("Created role id=%s name='%s' level=%s", role.id, name, level)
    return _to_response(role, 0)


def update_role(db: Session, role_id: int, payload: RolePayload) -> RoleResponse:
    """Apply the fields present in *payload*; omitted permissions are kept."""
    data = payload.model_dump(exclude_unset=True)
    if "name" in data:
        data["name"] = require_text(data["name"], "Role name cannot be empty")
    role = get_or_404(db, Role, role_id, _NOT_FOUND)

    if "level" in data:
        if data["level"] is None:
            raise ValidationError("Role level cannot be empty")
        ensure_choice(data["level"], ROLE_LEVELS, "Level")
    if "name" in data:
        ensure_unique(db, Role.name, data["name"], _DUPLICATE, exclude_id=role_id)

    if "permissions" in data:
        data["permissions"] = json.dumps(data["permissions"] or [])
    if "description" in data:
        data["description"] = optional_text(data["description"])
    for field, value in data.items():
        setattr(role, field, value)
    commit_or_conflict(db, _DUPLICATE)
    db.refresh(role)
    return _to_response(role, _user_count(db, role_id))


def delete_role(db: Session, role_id: int) -> None:
    role = get_or_404(db, Role, role_id, _NOT_FOUND)
    counts = count_references(db, {"users": User.role_id}, role_id)
    ensure_no_dependents(
        counts,
        "Cannot delete role with existing users. Please reassign them first.",
        "Role is assigned to",
    )

    delete_record(db, role)
    logger.info("Deleted role id=%s", role_id)


def list_permissions(search: str | None = None, category: str | None = None) -> PermissionCatalogue:
    """Filter the permission catalogue by free text and category."""
    permissions = [Permission(**entry) for entry in PERMISSION_CATALOGUE]
    categories = sorted({p.category for p in permissions})

    term = (search or "").strip().lower()
    if term:
        permissions = [
            p
            for p in permissions
            if term in p.name.lower() or term in p.description.lower() or term in p.id.lower()
        ]
    if category:
        permissions = [p for p in permissions if p.category == category]

    grouped: dict[str, list[Permission]] = {}
    for permission in permissions:
        grouped.setdefault(permission.category, []).append(permission)
    return PermissionCatalogue(
        data=permissions, grouped=grouped, categories=categories, total=len(permissions)
    )
