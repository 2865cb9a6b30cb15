from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class GoalCreate(BaseModel):
    # `current` is not accepted here: new goals always start at 0
    model_config = ConfigDict(extra="ignore")

    type: str = Field(min_length=1)
    target: int = Field(ge=1)

    @field_validator("type")
    @classmethod
    def _strip_type(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("type must not be empty")
        return v


class GoalCurrentUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    current: int = Field(ge=0)


class Goal(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )

    id: str
    user_id: str
    type: str
    target: int
    current: int = 0
    date: datetime
