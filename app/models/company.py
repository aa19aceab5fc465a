"""Company model — single-tenant settings record."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from app.database import Base


class Company(Base):
    """The organisation running the dashboard. Only the first row is used.

    Attributes:
        id: Primary key.
        name: Legal or display name.
        code: Unique internal code.
        address, phone, email, website, logo, description: Optional profile fields.
        status: "active" or "inactive".
    """

    __tablename__ = "company"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    code = Column(String(50), unique=True, nullable=False)
    address = Column(String(500), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(200), nullable=True)
    website = Column(String(300), nullable=True)
    logo = Column(String(500), nullable=True)
    description = Column(String(1000), nullable=True)
    status = Column(String(20), default="active", nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)
