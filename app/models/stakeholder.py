"""Stakeholder model — external or internal party involved in programs."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy import orm
from sqlalchemy.sql import func

from app.database import Base


class Stakeholder(Base):
    """Party with an interest in the company's programs.

    Attributes:
        type: "individual", "organization", "government" or "community".
        contact: Name of the person to reach on the stakeholder's side.
        importance: "low", "medium" or "high".
        influence: "low", "medium" or "high".
        relationship: "supporter", "neutral" or "opponent".
        contact_person_id: Internal user who owns the relationship.
    """

    __tablename__ = "stakeholder"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    type = Column(String(30), nullable=True)
    contact = Column(String(200), nullable=True)
    email = Column(String(200), nullable=True)
    phone = Column(String(50), nullable=True)
    address = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    importance = Column(String(10), default="medium", nullable=False)
    influence = Column(String(10), default="medium", nullable=False)
    relationship = Column(String(20), default="neutral", nullable=False)
    category_id = Column(Integer, ForeignKey("stakeholder_category.id"), nullable=True)
    contact_person_id = Column(Integer, ForeignKey("user_account.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # ``orm.relationship`` because the ``relationship`` column shadows the name
    category = orm.relationship(
        "StakeholderCategory", back_populates="stakeholders", lazy="select"
    )
    contact_person = orm.relationship("User", lazy="select")
    program_links = orm.relationship(
        "ProgramStakeholder", back_populates="stakeholder", lazy="select"
    )
