"""Company settings service: read and update the single company record."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.models.company import Company
from app.schemas.settings import CompanyPayload
from app.services.master_data_service import (
    commit_or_conflict,
    ensure_unique,
    optional_text,
)
from app.services.seed_service import ensure_default_company
from app.utils.constants import STATUS_ACTIVE
from app.utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_CODE_TAKEN = "Company code already exists"


def get_company(db: Session) -> Company:
    return ensure_default_company(db)


def update_company(db: Session, payload: CompanyPayload) -> Company:
    """Overwrite the company profile with *payload*.

    Optional fields left out of the payload are cleared, matching a full
    form submit; ``status`` falls back to ``"active"``.

    Raises:
        ValidationError: ``name`` or ``code`` missing.
        NotFoundError: No company record exists yet.
        ConflictError: ``code`` used by another company row.
    """
    name = optional_text(payload.name)
    code = optional_text(payload.code)
    if not name or not code:
        raise ValidationError("Name and code are required")

    company = db.query(Company).order_by(Company.id).first()
    if company is None:
        raise NotFoundError("Company not found")
    ensure_unique(db, Company.code, code, _CODE_TAKEN, exclude_id=company.id)

    company.name = name
    company.code = code
    company.address = optional_text(payload.address)
    company.phone = optional_text(payload.phone)
    company.email = optional_text(payload.email)
    company.website = optional_text(payload.website)
    company.logo = optional_text(payload.logo)
    company.description = optional_text(payload.description)
    company.status = optional_text(payload.status) or STATUS_ACTIVE
    commit_or_conflict(db, _CODE_TAKEN)
    db.refresh(company)
    logger.info("Company settings updated: code='%s'", code)
    return company
