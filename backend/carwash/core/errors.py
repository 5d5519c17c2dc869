"""
Centralized error kinds for scheduling and booking failures.

Every failure carries a machine-readable ``code`` (the ``error`` field of the
JSON body), a human-readable message and the HTTP status it maps to. Routes
and services raise these; the handlers registered in ``carwash.main`` turn
them into responses.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

# ---------------------------------------------------------------------------
# HTTP status codes for known error categories
# ---------------------------------------------------------------------------

STATUS_BAD_REQUEST = 400
STATUS_CONFLICT = 409
STATUS_INTERNAL_ERROR = 500


class CarWashError(Exception):
    """Base class for every error that is reported to API clients."""

    code: str = "unexpected_error"
    status_code: int = STATUS_INTERNAL_ERROR
    default_message: str = "Unexpected server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        self.message = message or self.default_message
        if code:
            self.code = code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


# ---------------------------------------------------------------------------
# Caller input (checked before any store access)
# ---------------------------------------------------------------------------

class InvalidRequestError(CarWashError):
    code = "missing_required_fields"
    status_code = STATUS_BAD_REQUEST
    default_message = "Required fields are missing"


class InvalidMonthError(InvalidRequestError):
    code = "invalid_month"
    default_message = "Invalid month. Use YYYY-MM."


# ---------------------------------------------------------------------------
# Business rules
# ---------------------------------------------------------------------------

class MinWeeklyHoursError(CarWashError):
    code = "min_weekly_hours_failed"
    status_code = STATUS_BAD_REQUEST
    default_message = "Schedule must include at least 10 hours per week."

    def __init__(self, failures: List[Dict[str, Any]], message: Optional[str] = None):
        super().__init__(message)
        self.failures = failures

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["failures"] = self.failures
        return body


class NoCreditsError(CarWashError):
    code = "no_credits"
    status_code = STATUS_CONFLICT
    default_message = "No credits remaining. Please upgrade your plan."


class NoCapacityError(CarWashError):
    code = "no_capacity"
    status_code = STATUS_CONFLICT
    default_message = "No availability remaining for that time slot."


class WasherNotAvailableError(CarWashError):
    code = "washer_not_available"
    status_code = STATUS_CONFLICT
    default_message = "Selected technician does not have capacity for this slot."


class CapacityFullError(CarWashError):
    code = "capacity_full"
    status_code = STATUS_CONFLICT
    default_message = "Slot just filled. Try again."


class AvailabilityNotFoundError(CarWashError):
    code = "availability_not_found"
    status_code = STATUS_CONFLICT
    default_message = "Availability changed."


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

class StoreError(CarWashError):
    """A store call failed; ``code`` names the operation that failed."""

    status_code = STATUS_INTERNAL_ERROR
    default_message = "Database operation failed"

    def __init__(self, code: str, exc: BaseException):
        super().__init__(code=code, details=str(exc) or exc.__class__.__name__)
