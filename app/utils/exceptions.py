"""
Domain exceptions for the CSR Dashboard API.

Route handlers and services raise these instead of building error
responses by hand. The handlers registered in ``app.main`` turn them into
JSON bodies, so every failure that reaches the client has a status code
and a human-readable message and nothing else.

Usage:
    from app.utils.exceptions import NotFoundError

    if category is None:
        raise NotFoundError("Kategori tidak ditemukan")
"""

from __future__ import annotations

from fastapi import status


class AppError(Exception):
    """Base exception for all expected, client-facing failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        details: str | None = None,
        status_code: int | None = None,
    ):
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(AppError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(AppError):
    """Missing, invalid or expired credential."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized", details: str | None = None):
        super().__init__(message, details)


class InactiveAccountError(AppError):
    """Credentials are valid but the account may not sign in."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    """No record with the requested id."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    """A unique field collides with an existing record.

    Master-data routes answer 400; registration passes 409 explicitly.
    """

    status_code = status.HTTP_400_BAD_REQUEST


class DependencyError(AppError):
    """Delete blocked because other records still reference the target."""

    status_code = status.HTTP_400_BAD_REQUEST
