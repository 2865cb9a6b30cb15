"""Storage contract shared by every backend (memory, JSON file, SQL).

Stores are plain objects built by `fittrack.storage.build_storage` and handed
to the application; nothing looks them up through module globals.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from typing import Any

import pydantic

from fittrack.core.errors import ValidationError
from fittrack.core.time_utils import end_of_day, ensure_utc, start_of_day
from fittrack.db import new_id
from fittrack.schemas.exercise import Exercise, ExerciseCreate
from fittrack.schemas.goal import Goal, GoalCreate
from fittrack.schemas.workout import Workout, WorkoutCreate

Clock = Callable[[], datetime]

# Fields a PATCH can never touch
PROTECTED_FIELDS = frozenset({"id", "user_id", "userId"})


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def describe_errors(exc: pydantic.ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}"
        for err in exc.errors()
    )


def validated(model: type[pydantic.BaseModel], data: Mapping[str, Any]):
    """model_validate, with pydantic errors turned into our ValidationError."""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(describe_errors(e)) from e


def build_workout(user_id: str, data: WorkoutCreate, now: datetime) -> Workout:
    return validated(
        Workout,
        {
            "id": new_id(),
            "user_id": user_id,
            "exercise_type": data.exercise_type,
            "duration": data.duration,
            "calories": data.calories,
            "intensity": data.intensity,
            "notes": data.notes,
            "date": ensure_utc(data.date or now),
        },
    )


def merge_workout(existing: Workout, changes: Mapping[str, Any]) -> Workout:
    """Shallow-merge `changes` (snake_case keys) over `existing` and re-validate."""
    merged = existing.model_dump()
    for key, value in changes.items():
        if key in PROTECTED_FIELDS:
            continue
        merged[key] = value
    if isinstance(merged.get("date"), datetime):
        merged["date"] = ensure_utc(merged["date"])
    return validated(Workout, merged)


def build_goal(user_id: str, data: GoalCreate, now: datetime) -> Goal:
    # current always starts at 0, whatever the caller sent
    return validated(
        Goal,
        {
            "id": new_id(),
            "user_id": user_id,
            "type": data.type,
            "target": data.target,
            "current": 0,
            "date": ensure_utc(now),
        },
    )


def check_current(new_current: int) -> None:
    if new_current < 0:
        raise ValidationError("current must be >= 0")


class WorkoutStore(ABC):
    def __init__(self, tz: tzinfo | None = None, clock: Clock = utc_now):
        self.tz = tz
        self.clock = clock

    def range_bounds(self, start: date | datetime, end: date | datetime) -> tuple[datetime, datetime]:
        """UTC bounds for a date-range query.

        `end` is always pushed to the last instant of its civil day, so a
        caller passing Sunday 00:00 still gets Sunday's workouts.
        """
        if isinstance(start, datetime):
            lo = ensure_utc(start)
        else:
            lo = ensure_utc(start_of_day(start, self.tz))
        hi = ensure_utc(end_of_day(end, self.tz))
        return lo, hi

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Workout]:
        """All workouts of `user_id`, newest first. Empty for unknown users."""

    @abstractmethod
    def create(self, user_id: str, data: WorkoutCreate) -> Workout:
        """Persist a new workout. `date` defaults to now."""

    @abstractmethod
    def update(self, workout_id: str, changes: Mapping[str, Any], user_id: str | None = None) -> Workout:
        """Shallow-merge `changes`; NotFoundError if missing (or owned by someone else)."""

    @abstractmethod
    def list_by_user_and_date_range(
        self, user_id: str, start: date | datetime, end: date | datetime
    ) -> list[Workout]:
        """Workouts with start <= date <= end-of-day(end), newest first."""

    @abstractmethod
    def delete(self, workout_id: str, user_id: str | None = None) -> None:
        """Remove a workout; NotFoundError if missing."""


class GoalStore(ABC):
    def __init__(self, clock: Clock = utc_now):
        self.clock = clock

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Goal]:
        """Goals of `user_id`, oldest first."""

    @abstractmethod
    def create(self, user_id: str, data: GoalCreate) -> Goal:
        """Persist a new goal with current = 0."""

    @abstractmethod
    def update_current(self, goal_id: str, new_current: int, user_id: str | None = None) -> Goal:
        """Set `current`; NotFoundError if missing."""


class ExerciseStore(ABC):
    @abstractmethod
    def list_all(self) -> list[Exercise]:
        """The exercise catalog, seeded with the defaults on first use."""

    @abstractmethod
    def create(self, data: ExerciseCreate) -> Exercise:
        ...


@dataclass
class Storage:
    """The three stores of one backend, built together."""

    workouts: WorkoutStore
    goals: GoalStore
    exercises: ExerciseStore
    backend: str = "memory"
    _closers: list[Callable[[], None]] = field(default_factory=list, repr=False)

    def close(self) -> None:
        for closer in self._closers:
            closer()
