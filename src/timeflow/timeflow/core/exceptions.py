from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidState(DomainError):
    """Raised when a required identity (e.g. the employee) is missing."""


class InvalidTransition(DomainError):
    """Raised when a session action is not allowed in the current state."""


class ShiftConflictError(InvalidTransition):
    """Raised when a shift would double-book an employee on the same day."""

    def __init__(self, message: str, *, conflicting: Any = None):
        super().__init__(message)
        self.conflicting = conflicting


class RemoteError(DomainError):
    """Base for failures talking to the remote API."""


class NetworkFailure(RemoteError):
    """The request could not complete (timeout, connectivity)."""


class RemoteRejected(RemoteError):
    """The backend answered with a non-success status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
