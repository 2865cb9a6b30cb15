"""Adapter for workouts written by the standalone frontend lineage.

That client stored `caloriesBurned` / `workoutDate` and a four-level
intensity scale. Records are mapped onto the canonical WorkoutCreate here so
the rest of the backend only ever sees one schema.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fittrack.schemas.workout import Intensity, WorkoutCreate


class LegacyIntensity(str, Enum):
    low = "Low"
    moderate = "Moderate"
    high = "High"
    very_high = "Very High"


INTENSITY_MAP = {
    LegacyIntensity.low: Intensity.low,
    LegacyIntensity.moderate: Intensity.medium,
    LegacyIntensity.high: Intensity.high,
    LegacyIntensity.very_high: Intensity.high,
}


class LegacyWorkout(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    exercise_type: str = Field(alias="exerciseType", min_length=1)
    duration: int = Field(ge=1)
    calories_burned: int = Field(alias="caloriesBurned", ge=0)
    intensity: LegacyIntensity
    notes: Optional[str] = None
    workout_date: datetime = Field(alias="workoutDate")


def to_workout_create(legacy: LegacyWorkout) -> WorkoutCreate:
    return WorkoutCreate(
        exercise_type=legacy.exercise_type,
        duration=legacy.duration,
        calories=legacy.calories_burned,
        intensity=INTENSITY_MAP[legacy.intensity],
        # the old client saved "" for no notes
        notes=legacy.notes or None,
        date=legacy.workout_date,
    )
