class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when an entity is absent or belongs to another clinic."""


class ConflictError(DomainError):
    """Raised when the current state of an entity forbids the operation."""


class AlreadyClockedIn(ConflictError):
    """Raised on a second clock-in for the same staff member and day."""


class NoActiveClockIn(ConflictError):
    """Raised on clock-out when today has no open attendance record."""


class StoreError(DomainError):
    """Raised when the underlying database fails."""
