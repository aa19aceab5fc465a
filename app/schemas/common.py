"""
Shared Pydantic v2 schemas reused across multiple modules.

Provides the list envelope, the delete confirmation and the error bodies
so that each resource module can compose them without duplicating field
definitions.
"""

from __future__ import annotations

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ListResponse(BaseModel, Generic[T]):
    """``{data, total}`` envelope returned by master-data list endpoints.

    Attributes:
        data: The records, ordered by name unless stated otherwise.
        total: ``len(data)``. There is no pagination on master data.
    """

    data: list[T]
    total: int = Field(..., ge=0, description="Jumlah data.")


class DataResponse(BaseModel, Generic[T]):
    """``{data, message?}`` envelope used by settings and profile endpoints."""

    data: T
    message: str | None = None


class DeleteResponse(BaseModel):
    """Confirmation returned by ``DELETE /{id}`` endpoints.

    Attributes:
        message: Short human-readable result summary.
        deleted_id: Primary key of the removed record.
    """

    message: str = Field(..., description="Ringkasan hasil operasi.")
    deleted_id: int


class ErrorResponse(BaseModel):
    """Error body for resource routes.

    Attributes:
        error: Human-readable message, safe to show to the user.
        details: Optional extended information (dependency summary, hint).
    """

    error: str
    details: str | None = None


class ApiErrorResponse(BaseModel):
    """Error body for the ``/api/auth`` envelope."""

    success: bool = False
    message: str
    details: str | None = None


class MessageResponse(BaseModel):
    """Generic confirmation for operations that do not return a resource."""

    success: bool = True
    message: str


class PaginationParams(BaseModel):
    """Pagination parameters for the paged list endpoints.

    Attributes:
        page: 1-based page number.
        limit: Rows per page (capped at 100).
    """

    page: int = Field(default=1, ge=1, description="Nomor halaman (mulai 1).")
    limit: int = Field(default=10, ge=1, le=100, description="Jumlah data per halaman.")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class SortParams(BaseModel):
    """Requested ordering; unknown sort keys fall back to newest first."""

    sort: str = "created_at"
    order: Literal["asc", "desc"] = "desc"


class PageMeta(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class PagedResponse(BaseModel, Generic[T]):
    """``{data, pagination}`` envelope of the programs, stakeholders,
    sub-programs, activities, budgets and roles lists."""

    data: list[T]
    pagination: PageMeta
