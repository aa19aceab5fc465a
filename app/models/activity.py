"""Activity model — a unit of work inside a program."""

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Activity(Base):
    __tablename__ = "activity"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(300), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(30), nullable=True)  # "training", "workshop", "donation", ...
    status = Column(String(20), default="planned", nullable=False)
    priority = Column(String(20), default="medium", nullable=False)
    progress = Column(Float, default=0, nullable=False)
    location = Column(String(300), nullable=True)
    participants = Column(Integer, nullable=True)
    budget = Column(Numeric(18, 2), nullable=True)
    actual_cost = Column(Numeric(18, 2), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    program_id = Column(Integer, ForeignKey("program.id"), nullable=True)
    sub_program_id = Column(Integer, ForeignKey("sub_program.id"), nullable=True)
    department_id = Column(Integer, ForeignKey("department.id"), nullable=True)
    assigned_to_id = Column(Integer, ForeignKey("user_account.id"), nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    program = relationship("Program", back_populates="activities", lazy="select")
    sub_program = relationship("SubProgram", back_populates="activities", lazy="select")
    department = relationship("Department", back_populates="activities", lazy="select")
    assigned_to = relationship("User", back_populates="assigned_activities", lazy="select")
