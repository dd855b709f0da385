"""
Domain errors raised by the service layer.

Routers never build error responses themselves: every ``ServiceError`` is
turned into ``{"detail": message}`` with its ``status_code`` by the handler
registered in ``educonnect.main``.
"""

from fastapi import status

FORBIDDEN_MESSAGE = "Not enough permissions"


class ServiceError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class InvalidStatus(ValidationError):
    default_message = "Invalid status value"


class InvalidRating(ValidationError):
    default_message = "Rating must be an integer between 1 and 5"


class InvalidRole(ValidationError):
    default_message = "Invalid role specified"


class InvalidParticipant(ValidationError):
    def __init__(self, side: str):
        self.side = side
        super().__init__(f"Invalid {side} ID")


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class Forbidden(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = FORBIDDEN_MESSAGE

    def __init__(self):
        # Same text for missing and unauthorized targets.
        super().__init__(FORBIDDEN_MESSAGE)


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict with the current state of the resource"


class StorageFault(ServiceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Storage unavailable. Please try again later."
