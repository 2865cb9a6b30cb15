from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Intensity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class WorkoutBase(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    exercise_type: str = Field(min_length=1)
    duration: int = Field(ge=1)  # minutes
    calories: int = Field(ge=0)
    intensity: Intensity
    notes: Optional[str] = None

    @field_validator("exercise_type")
    @classmethod
    def _strip_exercise_type(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("exerciseType must not be empty")
        return v


class WorkoutCreate(WorkoutBase):
    """Schema for creating a workout. `date` defaults to now on the server."""

    date: Optional[datetime] = None


class WorkoutUpdate(BaseModel):
    """Partial update; every field optional. id/userId are not accepted."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    exercise_type: Optional[str] = Field(default=None, min_length=1)
    duration: Optional[int] = Field(default=None, ge=1)
    calories: Optional[int] = Field(default=None, ge=0)
    intensity: Optional[Intensity] = None
    notes: Optional[str] = None
    date: Optional[datetime] = None


class Workout(WorkoutBase):
    """Stored workout record, immutable once built."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )

    id: str
    user_id: str
    date: datetime
