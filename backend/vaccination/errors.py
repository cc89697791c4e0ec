"""
Precondition failures raised by the booking service.

Every failure carries an ErrorCode; the HTTP layer turns it into a JSON
response with the status code attached to that ErrorCode.
"""

from enum import Enum

from fastapi import status


class ErrorCode(Enum):
    INVALID_BRANCH_CODE = (status.HTTP_400_BAD_REQUEST, "Invalid branch code")
    INVALID_VACCINE_CODE = (status.HTTP_400_BAD_REQUEST, "Invalid vaccine code")
    INVALID_PAYMENT_METHOD = (status.HTTP_400_BAD_REQUEST, "Invalid payment method")
    INVALID_TIMESLOT_ID = (status.HTTP_400_BAD_REQUEST, "Invalid time slot id")
    TIMESLOT_UNAVAILABLE = (status.HTTP_409_CONFLICT, "Time slot is not available")
    INVALID_SCHEDULE = (status.HTTP_404_NOT_FOUND, "Invalid schedule")
    INTERNAL_SERVER_ERROR = (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    def __init__(self, http_status: int, message: str):
        self.http_status = http_status
        self.message = message


class PreconditionError(Exception):
    """Raised when caller input or stored state does not allow the operation."""

    def __init__(self, error_code: ErrorCode, detail: str | None = None):
        self.error_code = error_code
        self.detail = detail or error_code.message
        super().__init__(f"{error_code.name}: {self.detail}")


class ScheduleConflictError(Exception):
    """Raised by storage when a (branch, date, time slot) is already taken."""
