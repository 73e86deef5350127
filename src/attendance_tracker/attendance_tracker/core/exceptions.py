from __future__ import annotations

from .result import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = ErrorKind.VALIDATION


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = ErrorKind.VALIDATION


class NotFoundError(DomainError):
    """Raised when no record matches the given identity."""

    kind = ErrorKind.NOT_FOUND


class NoOpError(DomainError):
    """Raised when an update carries nothing to change."""

    kind = ErrorKind.NO_OP


class NoChangeError(DomainError):
    """Raised when the store reports zero affected rows."""

    kind = ErrorKind.NO_CHANGE


class StorageError(DomainError):
    """Raised when the storage engine fails."""

    kind = ErrorKind.STORAGE


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    kind = ErrorKind.UNAUTHENTICATED


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = ErrorKind.FORBIDDEN
