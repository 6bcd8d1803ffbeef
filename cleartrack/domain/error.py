"""Domain layer errors.

Each error carries the failure ``kind`` reported to callers. The interface
layer maps kinds to HTTP responses; anything that is not a DomainError is
reported as ``internal``.
"""

from typing import ClassVar


class DomainError(Exception):
    """Base domain error."""

    kind: ClassVar[str] = "internal"


class UnauthenticatedError(DomainError):
    """Raised when an operation requires a verified caller and has none."""

    kind = "unauthenticated"

    def __init__(self, message: str = "User must be authenticated"):
        super().__init__(message)


class PermissionDeniedError(DomainError):
    """Raised when the caller lacks the role or ownership an operation needs."""

    kind = "permission-denied"


class ValidationError(DomainError):
    """Domain validation error (malformed or missing input)."""

    kind = "invalid-argument"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not-found"

    def __init__(self, resource: str, identifier: str, message: str | None = None):
        self.resource = resource
        self.identifier = identifier
        super().__init__(message or f"{resource} not found: {identifier}")


class FailedPreconditionError(DomainError):
    """Raised when an entity is not in the state an operation requires."""

    kind = "failed-precondition"


class AlreadyUsedError(FailedPreconditionError):
    """Raised when a single-use invite has already been consumed."""


class ExpiredError(DomainError):
    """Raised when a time-bound credential is past its expiry."""

    kind = "deadline-exceeded"


class AlreadyExistsError(DomainError):
    """Raised when creating an account that already exists."""

    kind = "already-exists"


class ConcurrencyConflictError(DomainError):
    """Raised when a conditional update keeps losing to concurrent writers."""

    kind = "internal"
