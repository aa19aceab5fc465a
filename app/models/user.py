"""User model — dashboard account tied to a role and a department."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class User(Base):
    """System user.

    Attributes:
        id: Primary key.
        name: Full display name.
        email: Unique login email.
        password_hash: Bcrypt-hashed password (never store plain text).
        status: "active" or "inactive". Only active users may log in.
        position: Optional job title.
        phone: Optional contact number.
        role_id: FK to Role.
        department_id: FK to Department.
        last_login: Timestamp of the last successful login.
        created_at: Record creation timestamp.
        updated_at: Last modification timestamp.
    """

    __tablename__ = "user_account"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(200), unique=True, nullable=False, index=True)
    password_hash = Column(String(200), nullable=False)
    status = Column(String(20), default="active", nullable=False)
    position = Column(String(200), nullable=True)
    phone = Column(String(50), nullable=True)
    role_id = Column(Integer, ForeignKey("role.id"), nullable=False)
    department_id = Column(Integer, ForeignKey("department.id"), nullable=False)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    role = relationship("Role", back_populates="users", lazy="select")
    department = relationship("Department", back_populates="users", lazy="select")
    created_programs = relationship(
        "Program", back_populates="created_by", lazy="select"
    )
    assigned_activities = relationship(
        "Activity", back_populates="assigned_to", lazy="select"
    )
    stakeholder_links = relationship(
        "ProgramStakeholder", back_populates="user", lazy="select"
    )
