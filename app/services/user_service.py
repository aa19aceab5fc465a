"""
User management service layer.

Backs ``/api/master/users`` (admin maintenance of accounts) and
``/api/profile`` (the signed-in user editing their own record). Follows
the same guard order as ``master_data_service``; the unique field here is
``email``.
"""

from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.config import get_settings
from app.models.activity import Activity
from app.models.department import Department
from app.models.program import Program
from app.models.program_stakeholder import ProgramStakeholder
from app.models.role import Role
from app.models.stakeholder import Stakeholder
from app.models.user import User
from app.schemas.user import (
    ProfileCounts,
    ProfilePayload,
    ProfileResponse,
    UserPayload,
    UserResponse,
)
from app.services.master_data_service import (
    commit_or_conflict,
    count_references,
    delete_record,
    ensure_no_dependents,
    ensure_unique,
    get_or_404,
    optional_text,
    require_text,
)
from app.utils.constants import (
    MAX_PASSWORD_BYTES,
    MIN_PASSWORD_LENGTH,
    STATUS_ACTIVE,
    USER_STATUSES,
)
from app.utils.exceptions import ValidationError
from app.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

USER_REFERENCES = {
    "Program": Program.created_by_id,
    "Activity": Activity.assigned_to_id,
    "Stakeholder": ProgramStakeholder.user_id,
    "Stakeholder contact": Stakeholder.contact_person_id,
}

_USER_NOT_FOUND = "User tidak ditemukan"
_USER_DUPLICATE = "User dengan email tersebut sudah ada"


def _validate_status(value: str | None) -> str | None:
    value = optional_text(value)
    if value is not None and value not in USER_STATUSES:
        raise ValidationError(f"Status user harus salah satu dari: {', '.join(USER_STATUSES)}")
    return value


def _validate_assignment(db: Session, department_id: int | None, role_id: int | None) -> None:
    if department_id is not None and db.get(Department, department_id) is None:
        raise ValidationError("Department tidak ditemukan")
    if role_id is not None and db.get(Role, role_id) is None:
        raise ValidationError("Role tidak ditemukan")


def _validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password minimal {MIN_PASSWORD_LENGTH} karakter")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password maksimal {MAX_PASSWORD_BYTES} byte")


# ---------------------------------------------------------------------------
# Admin maintenance
# ---------------------------------------------------------------------------


def list_users(db: Session) -> list[User]:
    users = (
        db.query(User)
        .options(joinedload(User.role), joinedload(User.department))
        .order_by(User.name)
        .all()
    )
    logger.debug("list_users: %d records", len(users))
    return users


def create_user(db: Session, payload: UserPayload) -> User:
    """Create an account from the master-data screen.

    A missing password falls back to ``DEFAULT_USER_PASSWORD``; either way
    only the bcrypt hash is stored.
    """
    email = require_text(payload.email, "Email user wajib diisi")
    name = require_text(payload.name, "Nama user wajib diisi")
    if not payload.department_id or not payload.role_id:
        raise ValidationError("Department dan Role wajib dipilih")
    status = _validate_status(payload.status) or STATUS_ACTIVE
    password = payload.password or get_settings().DEFAULT_USER_PASSWORD
    _validate_password(password)
    _validate_assignment(db, payload.department_id, payload.role_id)
    ensure_unique(db, User.email, email, _USER_DUPLICATE)

    user = User(
        email=email,
        name=name,
        password_hash=hash_password(password),
        department_id=payload.department_id,
        role_id=payload.role_id,
        position=optional_text(payload.position),
        phone=optional_text(payload.phone),
        status=status,
    )
    db.add(user)
    commit_or_conflict(db, _USER_DUPLICATE)
    db.refresh(user)
    logger.info("Created user id=%s email='%s'", user.id, email)
    return user


def update_user(db: Session, user_id: int, payload: UserPayload) -> User:
    """Update an account. Omitted department, role and status are kept."""
    email = require_text(payload.email, "Email user wajib diisi")
    name = require_text(payload.name, "Nama user wajib diisi")
    user = get_or_404(db, User, user_id, _USER_NOT_FOUND)
    ensure_unique(db, User.email, email, _USER_DUPLICATE, exclude_id=user_id)
    status = _validate_status(payload.status)
    _validate_assignment(db, payload.department_id, payload.role_id)

    user.email = email
    user.name = name
    user.department_id = payload.department_id or user.department_id
    user.role_id = payload.role_id or user.role_id
    user.position = optional_text(payload.position)
    user.phone = optional_text(payload.phone)
    user.status = status or user.status
    commit_or_conflict(db, _USER_DUPLICATE)
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> None:
    user = get_or_404(db, User, user_id, _USER_NOT_FOUND)
    counts = count_references(db, USER_REFERENCES, user_id)
    ensure_no_dependents(
        counts,
        "Tidak dapat menghapus user yang sedang digunakan",
        "User ini terkait dengan:",
    )

    delete_record(db, user)
    logger.info("Deleted user id=%s", user_id)


# ---------------------------------------------------------------------------
# Profile (self-service)
# ---------------------------------------------------------------------------


def get_profile(db: Session, user: User) -> ProfileResponse:
    created_programs = (
        db.query(func.count(Program.id)).filter(Program.created_by_id == user.id).scalar()
    )
    assigned_activities = (
        db.query(func.count(Activity.id)).filter(Activity.assigned_to_id == user.id).scalar()
    )
    return ProfileResponse(
        **UserResponse.model_validate(user).model_dump(),
        counts=ProfileCounts(
            created_programs=created_programs or 0,
            assigned_activities=assigned_activities or 0,
        ),
    )


def update_profile(db: Session, user: User, payload: ProfilePayload) -> User:
    """Apply a self-service profile edit.

    Raises:
        ValidationError: Blank name, wrong current password, or a new
            password shorter than the minimum.
        ConflictError: Email already used by another account.
    """
    change_password = bool(payload.current_password and payload.new_password)
    if change_password:
        if not verify_password(payload.current_password, user.password_hash):
            raise ValidationError("Current password is incorrect")
        _validate_password(payload.new_password)

    if payload.name is not None:
        user.name = require_text(payload.name, "Name cannot be empty")

    if payload.email is not None:
        email = require_text(payload.email, "Email cannot be empty")
        if email != user.email:
            ensure_unique(db, User.email, email, "Email already exists", exclude_id=user.id)
            user.email = email

    if payload.phone is not None:
        user.phone = optional_text(payload.phone)
    if payload.position is not None:
        user.position = optional_text(payload.position)

    if change_password:
        user.password_hash = hash_password(payload.new_password)
        logger.info("Password changed for user id=%s", user.id)

    commit_or_conflict(db, "Email already exists")
    db.refresh(user)
    return user
