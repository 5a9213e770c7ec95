"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
CONFLICT = "CONFLICT"
VALIDATION_ERROR = "VALIDATION_ERROR"
STORE_ERROR = "STORE_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a referenced colony, room, rental or company has no matching rows."""

    pass


class ConflictError(DomainError):
    """Raised when an operation would violate an invariant (e.g. deleting an occupied room)."""

    pass


class DomainValidationError(DomainError):
    """Raised when input fails business validation (negative amounts, empty names, bad counts)."""

    pass


class StoreError(DomainError):
    """Raised when the underlying persistence call failed.

    The store's own exception is kept unchanged on ``original`` (and as
    ``__cause__`` when raised with ``from``).
    """

    def __init__(self, message: str, original: Exception | None = None):
        super().__init__(message)
        self.original = original
