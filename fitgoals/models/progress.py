"""Progress entry model definitions."""
from typing import Any

from bson import ObjectId
from pydantic import Field, field_validator

from fitgoals.models.common import CamelModel, UTCDateTime


class ProgressBase(CamelModel):
    """Base progress fields."""

    goal_id: str
    date: UTCDateTime
    value: float = Field(ge=0, allow_inf_nan=False)


class ProgressCreate(ProgressBase):
    """Progress creation model."""

    @field_validator("goal_id", mode="before")
    @classmethod
    def goal_id_is_object_id(cls, value: Any) -> Any:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Goal ID is required")
        value = value.strip()
        if not ObjectId.is_valid(value):
            raise ValueError("Invalid goal ID format")
        return value


class Progress(ProgressBase):
    """Full progress entry with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    created_at: UTCDateTime
    updated_at: UTCDateTime
