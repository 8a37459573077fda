"""Typed failures raised by the entity services."""

from __future__ import annotations

from typing import Any, Optional


class ServiceError(RuntimeError):
    """Base class for failures surfaced to the HTTP layer."""

    status_code = 500
    kind = "store_error"
    retryable = False

    def __init__(self, message: str, errors: Optional[dict[str, list[str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": False,
            "error": self.kind,
            "message": self.message,
        }
        if self.errors:
            payload["errors"] = self.errors
        if self.retryable:
            payload["retryable"] = True
        return payload


class NotFoundError(ServiceError):
    """Raised when a referenced record does not exist."""

    status_code = 404
    kind = "not_found"


class ValidationFailure(ServiceError):
    """Raised when a payload is rejected before any change is applied."""

    status_code = 400
    kind = "validation_failed"


class IntegrityViolationError(ServiceError):
    """Raised when dependent records block the requested change."""

    status_code = 409
    kind = "integrity_violation"


class StoreUnavailableError(ServiceError):
    """Raised when the database cannot be reached in time. Safe to retry."""

    status_code = 503
    kind = "store_unavailable"
    retryable = True


__all__ = [
    "IntegrityViolationError",
    "NotFoundError",
    "ServiceError",
    "StoreUnavailableError",
    "ValidationFailure",
]
