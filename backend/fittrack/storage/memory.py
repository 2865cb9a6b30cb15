"""In-process backend. Data lives in dicts and is lost on restart."""

import logging
import threading
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from fittrack.core.constants import DEFAULT_EXERCISES
from fittrack.core.errors import NotFoundError
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

logger = logging.getLogger(__name__)


def newest_first(workouts) -> list[Workout]:
    return sorted(workouts, key=lambda w: w.date, reverse=True)


class InMemoryWorkoutStore(WorkoutStore):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._by_id: dict[str, Workout] = {}
        self._lock = threading.Lock()

    def _owned(self, workout_id: str, user_id: str | None) -> Workout:
        workout = self._by_id.get(workout_id)
        if workout is None or (user_id is not None and workout.user_id != user_id):
            raise NotFoundError("Workout not found")
        return workout

    def list_by_user(self, user_id: str) -> list[Workout]:
        with self._lock:
            return newest_first(w for w in self._by_id.values() if w.user_id == user_id)

    def create(self, user_id: str, data: WorkoutCreate) -> Workout:
        workout = build_workout(user_id, data, self.clock())
        with self._lock:
            self._by_id[workout.id] = workout
        logger.debug("created workout %s for %s", workout.id, user_id)
        return workout

    def update(self, workout_id: str, changes: Mapping[str, Any], user_id: str | None = None) -> Workout:
        with self._lock:
            updated = merge_workout(self._owned(workout_id, user_id), changes)
            self._by_id[workout_id] = updated
        return updated

    def list_by_user_and_date_range(
        self, user_id: str, start: date | datetime, end: date | datetime
    ) -> list[Workout]:
        lo, hi = self.range_bounds(start, end)
        with self._lock:
            return newest_first(
                w for w in self._by_id.values() if w.user_id == user_id and lo <= w.date <= hi
            )

    def delete(self, workout_id: str, user_id: str | None = None) -> None:
        with self._lock:
            self._owned(workout_id, user_id)
            del self._by_id[workout_id]


class InMemoryGoalStore(GoalStore):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._by_id: dict[str, Goal] = {}
        self._lock = threading.Lock()

    def list_by_user(self, user_id: str) -> list[Goal]:
        with self._lock:
            return [g for g in self._by_id.values() if g.user_id == user_id]

    def create(self, user_id: str, data: GoalCreate) -> Goal:
        goal = build_goal(user_id, data, self.clock())
        with self._lock:
            self._by_id[goal.id] = goal
        return goal

    def update_current(self, goal_id: str, new_current: int, user_id: str | None = None) -> Goal:
        check_current(new_current)
        with self._lock:
            goal = self._by_id.get(goal_id)
            if goal is None or (user_id is not None and goal.user_id != user_id):
                raise NotFoundError("Goal not found")
            updated = goal.model_copy(update={"current": new_current})
            self._by_id[goal_id] = updated
        return updated


class InMemoryExerciseStore(ExerciseStore):
    def __init__(self):
        self._items: list[Exercise] = []
        self._seeded = False
        self._lock = threading.Lock()

    def _seed(self) -> None:
        # caller holds the lock
        if not self._seeded:
            self._items[:0] = [
                validated(Exercise, {"id": catalog_id(e["name"]), **e}) for e in DEFAULT_EXERCISES
            ]
            self._seeded = True

    def list_all(self) -> list[Exercise]:
        with self._lock:
            self._seed()
            return list(self._items)

    def create(self, data: ExerciseCreate) -> Exercise:
        exercise = validated(Exercise, {"id": new_id(), **data.model_dump()})
        with self._lock:
            self._seed()
            self._items.append(exercise)
        return exercise
