"""Role model — named permission set assigned to users."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class Role(Base):
    """Access role with a serialized list of capability strings.

    Attributes:
        id: Primary key.
        name: Unique display name, e.g. "Super Admin".
        description: Free-text explanation of the role.
        permissions: JSON-encoded list of capability strings,
            e.g. ``'["program.read", "stakeholder.read"]'``.
        level: Classifier — "super_admin", "admin", "manager" or "user".
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "role"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(String(500), nullable=True)
    permissions = Column(Text, nullable=False, default="[]")
    level = Column(String(50), nullable=False, default="user", index=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    users = relationship("User", back_populates="role", lazy="select")
