"""
Default-record provisioning for the CSR Dashboard.

The default role, department and company are created once by
``seed_defaults``, which runs in the application lifespan hook and from
``seed_data.py``. The ``ensure_*`` helpers are also safe to call from a
request: creation is guarded by the table's unique constraint, and a
concurrent insert that loses the race simply re-reads the winner's row.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.company import Company
from app.models.department import Department
from app.models.role import Role
from app.utils.constants import DEFAULT_COMPANY, DEFAULT_DEPARTMENT, DEFAULT_ROLE

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


def _ensure(
    db: Session,
    lookup: Callable[[], ModelT | None],
    factory: Callable[[], ModelT],
    label: str,
) -> ModelT:
    """Return ``lookup()`` or insert ``factory()`` and return the stored row.

    An ``IntegrityError`` on commit means another request inserted the same
    unique key first; the session is rolled back and the row re-read.

    Raises:
        RuntimeError: If the row is still missing after the insert attempt.
    """
    instance = lookup()
    if instance is not None:
        return instance

    db.add(factory())
    try:
        db.commit()
        logger.info("Provisioned default %s", label)
    except IntegrityError:
        db.rollback()
        logger.info("Default %s created concurrently; reusing it", label)

    instance = lookup()
    if instance is None:
        raise RuntimeError(f"Could not provision default {label}")
    return instance


def ensure_default_role(db: Session) -> Role:
    """Return the first ``user``-level role, creating the default one if absent."""
    return _ensure(
        db,
        lambda: (
            db.query(Role)
            .filter(Role.level == DEFAULT_ROLE["level"])
            .order_by(Role.id)
            .first()
        ),
        lambda: Role(
            name=DEFAULT_ROLE["name"],
            description=DEFAULT_ROLE["description"],
            level=DEFAULT_ROLE["level"],
            permissions=json.dumps(DEFAULT_ROLE["permissions"]),
        ),
        "role",
    )


def ensure_default_department(db: Session) -> Department:
    """Return the first department, creating ``General`` if none exists."""
    return _ensure(
        db,
        lambda: db.query(Department).order_by(Department.id).first(),
        lambda: Department(**DEFAULT_DEPARTMENT),
        "department",
    )


def ensure_default_company(db: Session) -> Company:
    """Return the single company record, creating a placeholder if absent."""
    return _ensure(
        db,
        lambda: db.query(Company).order_by(Company.id).first(),
        lambda: Company(**DEFAULT_COMPANY),
        "company",
    )


def seed_defaults(db: Session) -> None:
    """Provision every default record needed before the first registration."""
    role = ensure_default_role(db)
    department = ensure_default_department(db)
    company = ensure_default_company(db)
    logger.info(
        "Defaults ready: role=%r department=%r company=%r",
        role.name,
        department.code,
        company.code,
    )
