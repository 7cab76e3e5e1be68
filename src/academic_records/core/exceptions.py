from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class AuthenticationError(DomainError):
    """Raised when the request carries no usable identity."""


class AuthorizationError(DomainError):
    """Raised when an identity lacks rights over the target scope."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, fields: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.fields = list(fields or [])


class NotFoundError(DomainError):
    """Raised when the target record does not exist."""


class ConflictError(DomainError):
    """Raised on uniqueness violations (duplicate attendance, overlapping leave)."""


class QuotaExceededError(DomainError):
    """Raised when a requester already holds the maximum of pending leaves."""


class InvalidTransitionError(DomainError):
    """Raised on an illegal leave status change."""


class InvalidStateError(DomainError):
    """Raised when an operation is not allowed in the record's current state."""
