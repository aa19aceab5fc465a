"""Pydantic v2 schemas for the company settings endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CompanyPayload(BaseModel):
    """Body of ``PUT /api/settings``. ``name`` and ``code`` are required."""

    name: str | None = Field(default=None, max_length=200)
    code: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=200)
    website: str | None = Field(default=None, max_length=300)
    logo: str | None = Field(default=None, max_length=500)
    description: str | None = Field(default=None, max_length=1000)
    status: str | None = Field(default=None, max_length=20)


class CompanyResponse(BaseModel):
    id: int
    name: str
    code: str
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    logo: str | None = None
    description: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
