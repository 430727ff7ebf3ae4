"""
Custom exception classes for better error handling.
Provides specific error types instead of generic exceptions.
"""


class AvailabilityError(Exception):
    """Base exception for availability operations."""

    pass


class InvalidConstraintError(AvailabilityError):
    """Raised when an availability constraint record is malformed."""

    pass


class ValidationError(AvailabilityError):
    """Raised when input validation fails."""

    pass


class CalendarServiceError(AvailabilityError):
    """Raised when the busy-interval provider cannot be reached."""

    pass
