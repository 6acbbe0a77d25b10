from typing import Any, Mapping, Optional


class AppError(Exception):
    """Base class for errors a service raises on purpose.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, conflicting ids)
        code: machine-readable error code, defaults to the class code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_code = "APP_ERROR"
    default_message = "Application error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details or {}),
        }

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(AppError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_code = "SERVICE_VALIDATION_ERROR"
    default_message = "Invalid input"


class UnauthorizedError(AppError):
    """Raised when the caller could not be authenticated."""

    http_status = 401
    default_code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    """Raised when an authenticated caller may not touch a resource."""

    http_status = 403
    default_code = "FORBIDDEN"
    default_message = "Forbidden"


class NotFoundError(AppError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_code = "NOT_FOUND"
    default_message = "Not found"


class ConflictError(AppError):
    """Raised when a resource conflict occurs (duplicate entry, overlapping booking)."""

    http_status = 409
    default_code = "CONFLICT"
    default_message = "Conflict"
