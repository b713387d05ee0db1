"""User model definitions."""
from typing import Annotated, Any, Optional

from pydantic import EmailStr, Field, StringConstraints, field_validator

from fitgoals.models.common import CamelModel, UTCDateTime

Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=25)]


def _check_bcrypt_length(password: str) -> str:
    if len(password.encode("utf-8")) > 72:
        raise ValueError("Password cannot exceed 72 bytes")
    return password


def _require(value: Any, message: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(message)
    return value


class UserBase(CamelModel):
    """Base user fields."""

    username: Username
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class UserCreate(UserBase):
    """Signup request with the raw password."""

    password: str = Field(min_length=8)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        _require(value, "Password is required")
        return _check_bcrypt_length(value)


class LoginRequest(CamelModel):
    """Login request model."""

    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("password")
    @classmethod
    def password_present(cls, value: str) -> str:
        return _require(value, "Password is required")


class ChangePasswordRequest(CamelModel):
    """Password change request for the authenticated user."""

    current_password: str
    new_password: str = Field(min_length=8)

    @field_validator("current_password")
    @classmethod
    def current_password_present(cls, value: str) -> str:
        return _require(value, "Current password is required")

    @field_validator("new_password")
    @classmethod
    def new_password_fits_bcrypt(cls, value: str) -> str:
        return _check_bcrypt_length(value)


class TokenResponse(CamelModel):
    """Token response model."""

    token: str


class TokenClaims(CamelModel):
    """Identity decoded from a verified bearer token."""

    sub: str
    email: Optional[str] = None
    name: Optional[str] = None


class User(CamelModel):
    """User model without password (for API responses)."""

    id: str = Field(alias="_id", serialization_alias="id")
    username: str
    email: str
    created_at: UTCDateTime
    updated_at: UTCDateTime
