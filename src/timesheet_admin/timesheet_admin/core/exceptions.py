from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(DomainError):
    """Raised when an action is blocked by the current state of other records."""

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.details = details


class AuthenticationError(DomainError):
    """Raised when sign-in credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
