"""TypeProgram model — lookup list of program types."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class TypeProgram(Base):
    """Program type, e.g. "Donasi" or "Pemberdayaan"."""

    __tablename__ = "type_program"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), unique=True, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    programs = relationship("Program", back_populates="type", lazy="select")
