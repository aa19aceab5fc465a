"""StakeholderCategory model — grouping for stakeholders."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class StakeholderCategory(Base):
    """Stakeholder category.

    Attributes:
        id: Primary key.
        name: Unique category name.
        description: Optional free text.
        type: Category kind, e.g. "internal", "external", "government".
    """

    __tablename__ = "stakeholder_category"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), unique=True, nullable=False)
    description = Column(String(500), nullable=True)
    type = Column(String(50), nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    stakeholders = relationship("Stakeholder", back_populates="category", lazy="select")
