"""File backend: one JSON document holding workouts, goals and exercises.

Every operation reads the document, applies its change and writes it back
under a single lock. Writes go to a temp file that is then renamed over the
original, so a crash mid-write leaves the previous version intact.
"""

import json
import logging
import os
import threading
from collections.abc import Callable, Mapping
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Any

from fittrack.core.constants import DEFAULT_EXERCISES
from fittrack.core.errors import NotFoundError, StoreUnavailableError
from fittrack.core.time_utils import ensure_utc
from fittrack.db import catalog_id, new_id
from fittrack.schemas.exercise import Exercise, ExerciseCreate
from fittrack.schemas.goal import Goal, GoalCreate
from fittrack.schemas.workout import Workout, WorkoutCreate
from fittrack.storage.base import (
    ExerciseStore,
    GoalStore,
    WorkoutStore,
    build_goal,
    build_workout,
    check_current,
    merge_workout,
    validated,
)
from fittrack.storage.memory import newest_first

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT = {"workouts": [], "goals": [], "exercises": []}


class JsonDocument:
    """A JSON file shared by the three file-backed stores."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, list[dict[str, Any]]]:
        if not self.path.exists():
            return {key: [] for key in EMPTY_DOCUMENT}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise StoreUnavailableError(f"Storage file {self.path} is corrupt: {e}") from e
        if not isinstance(data, dict):
            raise StoreUnavailableError(
                f"Storage file {self.path} is corrupt: expected an object, got {type(data).__name__}"
            )
        for key in EMPTY_DOCUMENT:
            data.setdefault(key, [])
        return data

    def _write(self, data: dict[str, list[dict[str, Any]]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp, self.path)

    @contextmanager
    def transaction(self, write: bool = True):
        """Yield the parsed document; write it back if the block succeeds."""
        with self._lock:
            try:
                data = self._read()
                yield data
                if write:
                    self._write(data)
            except OSError as e:
                logger.error("File storage %s unavailable: %s", self.path, e)
                raise StoreUnavailableError(f"Storage file {self.path} is unavailable") from e

    def read(self, key: str, parse: Callable[[dict[str, Any]], Any]) -> list:
        with self.transaction(write=False) as data:
            return [parse(item) for item in data[key]]


def _dump(record) -> dict[str, Any]:
    return record.model_dump(mode="json")


def _load_workout(item: dict[str, Any]) -> Workout:
    workout = Workout.model_validate(item)
    return workout.model_copy(update={"date": ensure_utc(workout.date)})


class JsonFileWorkoutStore(WorkoutStore):
    def __init__(self, document: JsonDocument, **kwargs):
        super().__init__(**kwargs)
        self.document = document

    def _index(self, items: list[dict[str, Any]], workout_id: str, user_id: str | None) -> int:
        for i, item in enumerate(items):
            if item["id"] == workout_id and (user_id is None or item["user_id"] == user_id):
                return i
        raise NotFoundError("Workout not found")

    def list_by_user(self, user_id: str) -> list[Workout]:
        workouts = self.document.read("workouts", _load_workout)
        return newest_first(w for w in workouts if w.user_id == user_id)

    def create(self, user_id: str, data: WorkoutCreate) -> Workout:
        workout = build_workout(user_id, data, self.clock())
        with self.document.transaction() as doc:
            doc["workouts"].append(_dump(workout))
        logger.debug("created workout %s for %s in %s", workout.id, user_id, self.document.path)
        return workout

    def update(self, workout_id: str, changes: Mapping[str, Any], user_id: str | None = None) -> Workout:
        with self.document.transaction() as doc:
            i = self._index(doc["workouts"], workout_id, user_id)
            updated = merge_workout(_load_workout(doc["workouts"][i]), changes)
            doc["workouts"][i] = _dump(updated)
        return updated

    def list_by_user_and_date_range(
        self, user_id: str, start: date | datetime, end: date | datetime
    ) -> list[Workout]:
        lo, hi = self.range_bounds(start, end)
        workouts = self.document.read("workouts", _load_workout)
        return newest_first(w for w in workouts if w.user_id == user_id and lo <= w.date <= hi)

    def delete(self, workout_id: str, user_id: str | None = None) -> None:
        with self.document.transaction() as doc:
            del doc["workouts"][self._index(doc["workouts"], workout_id, user_id)]


class JsonFileGoalStore(GoalStore):
    def __init__(self, document: JsonDocument, **kwargs):
        super().__init__(**kwargs)
        self.document = document

    def list_by_user(self, user_id: str) -> list[Goal]:
        return [g for g in self.document.read("goals", Goal.model_validate) if g.user_id == user_id]

    def create(self, user_id: str, data: GoalCreate) -> Goal:
        goal = build_goal(user_id, data, self.clock())
        with self.document.transaction() as doc:
            doc["goals"].append(_dump(goal))
        return goal

    def update_current(self, goal_id: str, new_current: int, user_id: str | None = None) -> Goal:
        check_current(new_current)
        with self.document.transaction() as doc:
            for item in doc["goals"]:
                if item["id"] == goal_id and (user_id is None or item["user_id"] == user_id):
                    item["current"] = new_current
                    return Goal.model_validate(item)
        raise NotFoundError("Goal not found")


class JsonFileExerciseStore(ExerciseStore):
    def __init__(self, document: JsonDocument):
        self.document = document

    def _seed(self, doc: dict[str, list[dict[str, Any]]]) -> None:
        if not doc["exercises"]:
            doc["exercises"] = [
                _dump(validated(Exercise, {"id": catalog_id(e["name"]), **e})) for e in DEFAULT_EXERCISES
            ]

    def list_all(self) -> list[Exercise]:
        exercises = self.document.read("exercises", Exercise.model_validate)
        if exercises:
            return exercises
        # first read of an empty document: seed and persist once
        with self.document.transaction() as doc:
            self._seed(doc)
            return [Exercise.model_validate(item) for item in doc["exercises"]]

    def create(self, data: ExerciseCreate) -> Exercise:
        exercise = validated(Exercise, {"id": new_id(), **data.model_dump()})
        with self.document.transaction() as doc:
            self._seed(doc)
            doc["exercises"].append(_dump(exercise))
        return exercise
