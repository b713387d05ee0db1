"""Goal model definitions."""
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import Field, StringConstraints, ValidationInfo, field_validator

from fitgoals.models.common import CamelModel, UTCDateTime

GoalName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=50)]
GoalDescription = Annotated[str, StringConstraints(strip_whitespace=True, max_length=200)]

DATE_ORDER_MESSAGE = "End date must be on or after start date"


class GoalUnit(str, Enum):
    """Units a goal target can be measured in."""

    KG = "kg"
    LBS = "lbs"
    STEPS = "steps"
    MILES = "miles"
    KM = "km"
    MINUTES = "minutes"


def _empty_description(value: Any) -> Any:
    return "" if value is None else value


class GoalBase(CamelModel):
    """Base goal fields."""

    name: GoalName
    description: GoalDescription = ""
    target_value: float = Field(ge=0, allow_inf_nan=False)
    unit: GoalUnit
    start_date: UTCDateTime
    end_date: UTCDateTime


class GoalCreate(GoalBase):
    """Goal creation model."""

    @field_validator("description", mode="before")
    @classmethod
    def description_default(cls, value: Any) -> Any:
        return _empty_description(value)

    @field_validator("end_date")
    @classmethod
    def end_not_before_start(cls, value, info: ValidationInfo):
        start = info.data.get("start_date")
        if start is not None and value < start:
            raise ValueError(DATE_ORDER_MESSAGE)
        return value


class GoalUpdate(CamelModel):
    """Goal update model - all fields optional."""

    name: Optional[GoalName] = None
    description: Optional[GoalDescription] = None
    target_value: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    unit: Optional[GoalUnit] = None
    start_date: Optional[UTCDateTime] = None
    end_date: Optional[UTCDateTime] = None

    @field_validator("end_date")
    @classmethod
    def end_not_before_start(cls, value, info: ValidationInfo):
        start = info.data.get("start_date")
        if value is not None and start is not None and value < start:
            raise ValueError(DATE_ORDER_MESSAGE)
        return value


class Goal(GoalBase):
    """Full goal model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    created_at: UTCDateTime
    updated_at: UTCDateTime
