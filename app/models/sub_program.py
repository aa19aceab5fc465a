"""SubProgram model — a project carried out under a program."""

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class SubProgram(Base):
    """Project inside a CSR program.

    Attributes:
        status: "planned", "active", "completed" or "cancelled".
        progress: Completion percentage, 0 to 100.
        budget: Planned cost.
        actual_cost: Cost booked so far.
    """

    __tablename__ = "sub_program"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(300), nullable=False)
    description = Column(Text, nullable=True)
    program_id = Column(Integer, ForeignKey("program.id"), nullable=False)
    status = Column(String(20), default="planned", nullable=False)
    progress = Column(Float, default=0, nullable=False)
    budget = Column(Numeric(18, 2), nullable=True)
    actual_cost = Column(Numeric(18, 2), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    program = relationship("Program", back_populates="sub_programs", lazy="select")
    activities = relationship("Activity", back_populates="sub_program", lazy="select")
    budgets = relationship("Budget", back_populates="sub_program", lazy="select")
