from typing import Optional

from fastapi import status


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing or invalid."""


class ClinicError(Exception):
    """Base class for domain errors that are reported to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class ValidationError(ClinicError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    message = "Invalid request"


class NoFieldsProvided(ValidationError):
    code = "no_fields_provided"
    message = "No fields to update"


class InvalidCredentials(ClinicError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    message = "Invalid credentials"


class MissingToken(ClinicError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "missing_token"
    message = "Access token required"


class InvalidOrExpiredToken(ClinicError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "invalid_token"
    message = "Invalid or expired token"


class InsufficientPermissions(ClinicError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "insufficient_permissions"
    message = "Insufficient permissions"


class ForbiddenOwnership(ClinicError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden_ownership"
    message = "Not allowed to act on this resource"


class NotFound(ClinicError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    message = "Resource not found"


class DuplicateKey(ClinicError):
    status_code = status.HTTP_409_CONFLICT
    code = "duplicate_key"
    message = "Resource already exists"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.field:
            payload["field"] = self.field
        return payload


class RateLimitExceeded(ClinicError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "rate_limited"
    message = "Too many requests. Please try again later."
