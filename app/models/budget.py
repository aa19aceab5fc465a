"""Budget model — allocated amount for a department, program or sub-program."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Budget(Base):
    """Budget line.

    Attributes:
        type: What the budget funds: "program", "project" or "activity".
        category: "operational", "capital", "personnel", "materials" or "services".
        status: "proposed", "approved", "allocated" or "spent".
        amount: Requested amount, always positive.
        approved_amount: Amount granted, when approved.
        spent_amount: Amount used so far.
        period: Free-form budget period, e.g. "2024" or "2024-Q1".
    """

    __tablename__ = "budget"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(300), nullable=False)
    type = Column(String(20), nullable=True)
    category = Column(String(20), nullable=True)
    amount = Column(Numeric(18, 2), default=0, nullable=False)
    currency = Column(String(3), default="IDR", nullable=False)
    status = Column(String(20), default="proposed", nullable=False)
    approved_amount = Column(Numeric(18, 2), nullable=True)
    spent_amount = Column(Numeric(18, 2), default=0, nullable=False)
    period = Column(String(50), nullable=True)
    approved_by = Column(String(200), nullable=True)
    approved_at = Column(DateTime, nullable=True)
    program_id = Column(Integer, ForeignKey("program.id"), nullable=True)
    sub_program_id = Column(Integer, ForeignKey("sub_program.id"), nullable=True)
    department_id = Column(Integer, ForeignKey("department.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    program = relationship("Program", back_populates="budgets", lazy="select")
    sub_program = relationship("SubProgram", back_populates="budgets", lazy="select")
    department = relationship("Department", back_populates="budgets", lazy="select")
