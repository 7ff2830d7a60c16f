from __future__ import annotations

from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``errors`` maps a form field name to its message so controllers can show
    the message next to the offending input.
    """

    def __init__(self, message: str = "", *, field: Optional[str] = None, errors: Optional[Mapping[str, str]] = None):
        self.errors: dict[str, str] = dict(errors or {})
        if field and field not in self.errors:
            self.errors[field] = message
        if not message:
            message = "; ".join(self.errors.values())
        super().__init__(message)


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when an operation targets a record that does not exist."""
