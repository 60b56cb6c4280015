"""Error messages shared across the service layer and the exception that carries them."""

from __future__ import annotations

from enum import Enum


class ErrorMessage(str, Enum):
    """Fixed messages for domain failures."""

    USER_NOT_FOUND = "user not found"
    EMAIL_ALREADY_USE = "email already in use"
    SERVICE_REQUEST_NOT_FOUND = "service request not found"
    ERROR_PARSING_REQUEST_TIME = "error parsing requested_time"
    ERROR_PARSING_SCHEDULE_TIME = "error parsing scheduled_time"
    NO_SERVICE_PROVIDER_FOUND_FOR_REQUEST_ID = "no service provider found for request id"
    SERVICE_NOT_FOUND = "service not found"
    SERVICE_ID_NOT_EXISTS = "service id not exists"
    INVALID_SERVICE_ID = "invalid service id"
    PROVIDER_NOT_FOUND = "provider not found"
    PROVIDER_NOT_EXISTS = "provider not exists"
    FAIL_CALCULATE_RATING = "fail to calculate rating"
    FAIL_UPDATE_RATING = "fail to update rating"
    REQUEST_NOT_BELONG_TO_HOUSEHOLDER = "service request does not belong to the householder"
    ONLY_ACCEPTED_REQUEST_CANCELLED = "only accepted service requests can be canceled"
    REQUEST_ALREADY_CANCELLED = "request is already cancelled"
    ONLY_PENDING_REQUEST_RESCHEDULED = "only pending request rescheduled"
    REQUEST_ALREADY_APPROVED = "request is already approved"
    NOT_UPDATE_PROVIDER_DETAILS = "not update provider details"
    NOT_UPDATE_REQUEST = "not update request"
    NOT_RETRIEVE_REQUEST = "not retrieve request"
    NO_APPROVE_REQUEST_FOUND = "no approve request found"
    INCORRECT_SECURITY_ANSWER = "incorrect security answer"
    REQUEST_CANCELLATION_TOO_LATE = (
        "cancellation not allowed within 4 hours of the scheduled time"
    )

    def __str__(self) -> str:
        return self.value


class DomainError(Exception):
    """A failure in the business rules, carrying a human-readable message."""

    def __init__(self, message: ErrorMessage | str) -> None:
        text = message.value if isinstance(message, ErrorMessage) else str(message)
        super().__init__(text)
        self.message = text

    @property
    def kind(self) -> ErrorMessage | None:
        """The matching fixed message, or None for free-form messages."""
        try:
            return ErrorMessage(self.message)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.message