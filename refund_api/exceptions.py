"""
Application exception hierarchy.

Services and policy checks raise these at the point of detection; the
handlers in ``refund_api.api.errors`` translate them to HTTP responses once,
at the boundary.
"""

from typing import Any


class AppError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        body: dict[str, Any] = {"detail": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    """Malformed or out-of-range input."""

    status_code = 400


class UnauthenticatedError(AppError):
    """Missing or invalid credentials."""

    status_code = 401


class ForbiddenError(AppError):
    """The actor may not perform this action."""

    status_code = 403


class NotFoundError(AppError):
    """Resource not found."""

    status_code = 404


class ConflictError(AppError):
    """A unique field is already taken."""

    status_code = 409


class DependentRecordsError(ConflictError):
    """Delete blocked because other records still reference the target."""

    status_code = 400
