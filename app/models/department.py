"""Department model — organisational unit with an optional parent."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Department(Base):
    """Company department. Departments may nest under a parent department.

    Attributes:
        id: Primary key.
        name: Display name, e.g. "CSR & Community Development".
        code: Unique short code, e.g. "CSR".
        description: Optional free text.
        parent_id: Optional FK to the parent department.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "department"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    code = Column(String(20), unique=True, nullable=False)
    description = Column(String(500), nullable=True)
    parent_id = Column(Integer, ForeignKey("department.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Self-referential hierarchy
    parent = relationship(
        "Department", remote_side=[id], back_populates="children", lazy="select"
    )
    children = relationship("Department", back_populates="parent", lazy="select")

    users = relationship("User", back_populates="department", lazy="select")
    programs = relationship("Program", back_populates="department", lazy="select")
    activities = relationship("Activity", back_populates="department", lazy="select")
    budgets = relationship("Budget", back_populates="department", lazy="select")
