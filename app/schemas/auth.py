"""
Pydantic v2 schemas for the authentication endpoints.

Covers the login and registration payloads and the ``{success, message,
data}`` envelope returned by ``/api/auth``. Request fields are optional at
the schema level: presence and length rules are checked by the route so
that a missing field answers 400 with the same message as a blank one.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Payload accepted by ``POST /api/auth/login``.

    Attributes:
        email: The account's email address.
        password: Plain-text password (transmitted over HTTPS only).
    """

    email: str | None = Field(default=None, max_length=200)
    password: str | None = Field(default=None, max_length=128)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "admin@sustainesia.com",
                "password": "password123",
            }
        }
    )


class RegisterRequest(BaseModel):
    """Payload accepted by ``POST /api/auth/register``.

    Attributes:
        name: Full display name.
        email: Email address; must not be registered yet.
        password: Plain-text password, at least 8 characters.
    """

    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=200)
    password: str | None = Field(default=None, max_length=128)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Ayu Lestari",
                "email": "ayu@sustainesia.com",
                "password": "rahasia123",
            }
        }
    )


class SessionUser(BaseModel):
    """Sanitized user summary returned after login/registration.

    Sensitive fields (``password_hash``) are never included.

    Attributes:
        id: Database primary key.
        name: Full display name.
        email: Email address on record.
        role: Role name.
        department: Department name.
    """

    id: int
    name: str
    email: str
    role: str | None = None
    department: str | None = None


class AuthResponse(BaseModel):
    """``{success, message, data}`` envelope for login, register and ``/me``."""

    success: bool = True
    message: str
    data: SessionUser
