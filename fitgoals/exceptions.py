"""Service-level errors and the HTTP status each one maps to."""
from typing import Optional


class ServiceError(Exception):
    """Base class for errors raised by services and the auth gate."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationFailed(ServiceError):
    """Client input failed one or more field constraints."""

    status_code = 400

    def __init__(self, errors: list[dict]):
        super().__init__("Validation failed")
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, msg: str) -> "ValidationFailed":
        return cls([{"field": field, "msg": msg}])

    def to_dict(self) -> dict:
        return {"errors": self.errors}


class MalformedIdentifier(ServiceError):
    """An id in the path could not be parsed as an ObjectId."""

    status_code = 400


class Unauthorized(ServiceError):
    """Missing, invalid or expired token, or wrong credentials."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFound(ServiceError):
    """Resource is missing or is owned by somebody else."""

    status_code = 404


class DuplicateIdentity(ServiceError):
    """Username or email is already taken."""

    status_code = 409


class InternalFailure(ServiceError):
    """Store unavailable or an unexpected library failure."""

    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(message)
        self.error = error

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.error:
            body["error"] = self.error
        return body
