class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class AuthenticationError(DomainError):
    """Raised when login credentials or a bearer token are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class AttendanceError(ValidationError):
    """Base for rejected clock-in / clock-out commands."""


class AlreadyClockedInError(AttendanceError):
    status_code = 409


class NoOpenClockInError(AttendanceError):
    pass


class WeekendClockInDisallowedError(AttendanceError):
    pass


class RecordConflictError(AttendanceError):
    """The store refused a write because the record changed underneath us."""

    status_code = 409
