"""Program model — CSR program, the main record master data hangs off."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Program(Base):
    """CSR program.

    Attributes:
        id: Primary key.
        name: Program title.
        description: Optional free text.
        status: "draft", "approved", "active", "completed" or "cancelled".
        priority: "low", "medium", "high" or "critical".
        start_date: Planned start.
        end_date: Planned end; always after ``start_date``.
        target_beneficiary: Expected number of beneficiaries.
        target_area: Region the program serves.
        category_id: Optional FK to CategoryProgram.
        type_id: Optional FK to TypeProgram.
        department_id: Optional FK to the owning Department.
        created_by_id: Optional FK to the User who created it.
    """

    __tablename__ = "program"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(300), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), default="draft", nullable=False)
    priority = Column(String(20), default="medium", nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    target_beneficiary = Column(Integer, nullable=True)
    target_area = Column(String(300), nullable=True)
    category_id = Column(Integer, ForeignKey("category_program.id"), nullable=True)
    type_id = Column(Integer, ForeignKey("type_program.id"), nullable=True)
    department_id = Column(Integer, ForeignKey("department.id"), nullable=True)
    created_by_id = Column(Integer, ForeignKey("user_account.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    category = relationship("CategoryProgram", back_populates="programs", lazy="select")
    type = relationship("TypeProgram", back_populates="programs", lazy="select")
    department = relationship("Department", back_populates="programs", lazy="select")
    created_by = relationship("User", back_populates="created_programs", lazy="select")
    sub_programs = relationship("SubProgram", back_populates="program", lazy="select")
    activities = relationship("Activity", back_populates="program", lazy="select")
    budgets = relationship("Budget", back_populates="program", lazy="select")
    stakeholder_links = relationship(
        "ProgramStakeholder", back_populates="program", lazy="select"
    )
