"""ProgramStakeholder model — link between a program, a stakeholder and a contact user."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class ProgramStakeholder(Base):
    __tablename__ = "program_stakeholder"

    id = Column(Integer, primary_key=True, autoincrement=True)
    program_id = Column(Integer, ForeignKey("program.id"), nullable=False)
    stakeholder_id = Column(Integer, ForeignKey("stakeholder.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("user_account.id"), nullable=True)
    role = Column(String(100), nullable=True)  # "partner", "beneficiary", "sponsor"
    created_at = Column(DateTime, default=func.now(), nullable=False)

    program = relationship("Program", back_populates="stakeholder_links", lazy="select")
    stakeholder = relationship("Stakeholder", back_populates="program_links", lazy="select")
    user = relationship("User", back_populates="stakeholder_links", lazy="select")
