from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"
    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    code = "authentication_failed"
    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "forbidden"
    status_code = 403


class NotFoundError(DomainError):
    code = "not_found"
    status_code = 404


class EmployeeNotFoundError(NotFoundError):
    code = "employee_not_found"


class EmployeeNotLinkedError(DomainError):
    """The logged-in account has no employee profile attached."""

    code = "employee_not_linked"
    status_code = 409


class AttendanceConflict(DomainError):
    status_code = 409


class AlreadyCheckedInError(AttendanceConflict):
    code = "already_checked_in"


class IsHolidayError(AttendanceConflict):
    code = "is_holiday"

    def __init__(self, message: str, *, holiday: Optional[Any] = None):
        super().__init__(message)
        self.holiday = holiday


class NoCheckInTodayError(AttendanceConflict):
    code = "no_check_in_today"


class AlreadyCheckedOutError(AttendanceConflict):
    code = "already_checked_out"


class DuplicateHolidayError(DomainError):
    code = "duplicate_holiday"
    status_code = 409


class HolidayFeedError(DomainError):
    """The external holiday feed could not be reached or rejected the request."""

    code = "holiday_feed_unavailable"
    status_code = 502


class DuplicateRecordError(Exception):
    """Storage-level unique constraint violation.

    Repositories raise this; services translate it into a domain error.
    """
