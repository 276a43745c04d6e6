"""Service-level errors rendered as the API's error envelope."""

from fastapi import status


class ServiceError(Exception):
    """Base error carrying a machine-checkable code and a human message."""

    code = "INTERNAL_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(ServiceError):
    """No authenticated caller."""

    code = "UNAUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "You must be signed in to perform this action."


class NotFoundError(ServiceError):
    """Record is missing or not owned by the caller. The two cases are not distinguished."""

    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found."


class ValidationError(ServiceError):
    """Payload failed a constraint."""

    code = "VALIDATION_ERROR"
    status_code = 422
    default_message = "Validation error"
