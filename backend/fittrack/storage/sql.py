"""Relational backend on SQLAlchemy (Postgres in production, SQLite in tests).

Each store call opens its own session from the pool and closes it on the way
out, success or failure. Writes are a single commit.
"""

import logging
from collections.abc import Mapping
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, sessionmaker

from fittrack.core.constants import DEFAULT_EXERCISES
from fittrack.core.errors import NotFoundError, StoreUnavailableError
from fittrack.core.time_utils import ensure_utc
from fittrack.db import catalog_id
from fittrack.models.exercise import ExerciseRow
from fittrack.models.goal import GoalRow
from fittrack.models.workout import WorkoutRow
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
)

logger = logging.getLogger(__name__)


class SessionScope:
    """Opens one pooled session per operation and maps connection failures."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def __call__(self):
        db: Session = self.session_factory()
        try:
            yield db
        except (OperationalError, InterfaceError, PoolTimeoutError) as e:
            db.rollback()
            logger.error("Database unavailable: %s", e)
            raise StoreUnavailableError("Database is unavailable") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


def _to_workout(row: WorkoutRow) -> Workout:
    # SQLite hands back naive datetimes; everything is stored as UTC
    workout = Workout.model_validate(row)
    return workout.model_copy(update={"date": ensure_utc(workout.date)})


def _to_goal(row: GoalRow) -> Goal:
    goal = Goal.model_validate(row)
    return goal.model_copy(update={"date": ensure_utc(goal.date)})


def _workout_columns(workout: Workout) -> dict[str, Any]:
    return {
        "exercise_type": workout.exercise_type,
        "duration": workout.duration,
        "calories": workout.calories,
        "intensity": workout.intensity.value,
        "notes": workout.notes,
        "date": workout.date,
    }


class SqlWorkoutStore(WorkoutStore):
    def __init__(self, scope: SessionScope, **kwargs):
        super().__init__(**kwargs)
        self.scope = scope

    def _owned(self, db: Session, workout_id: str, user_id: str | None) -> WorkoutRow:
        query = db.query(WorkoutRow).filter(WorkoutRow.id == workout_id)
        if user_id is not None:
            query = query.filter(WorkoutRow.user_id == user_id)
        row = query.first()
        if not row:
            raise NotFoundError("Workout not found")
        return row

    def list_by_user(self, user_id: str) -> list[Workout]:
        with self.scope() as db:
            rows = (
                db.query(WorkoutRow)
                .filter(WorkoutRow.user_id == user_id)
                .order_by(WorkoutRow.date.desc())
                .all()
            )
            return [_to_workout(r) for r in rows]

    def create(self, user_id: str, data: WorkoutCreate) -> Workout:
        workout = build_workout(user_id, data, self.clock())
        with self.scope() as db:
            db.add(WorkoutRow(id=workout.id, user_id=user_id, **_workout_columns(workout)))
            db.commit()
        logger.debug("created workout %s for %s", workout.id, user_id)
        return workout

    def update(self, workout_id: str, changes: Mapping[str, Any], user_id: str | None = None) -> Workout:
        with self.scope() as db:
            row = self._owned(db, workout_id, user_id)
            updated = merge_workout(_to_workout(row), changes)
            for key, value in _workout_columns(updated).items():
                setattr(row, key, value)
            db.commit()
            return updated

    def list_by_user_and_date_range(
        self, user_id: str, start: date | datetime, end: date | datetime
    ) -> list[Workout]:
        lo, hi = self.range_bounds(start, end)
        with self.scope() as db:
            rows = (
                db.query(WorkoutRow)
                .filter(WorkoutRow.user_id == user_id)
                .filter(WorkoutRow.date >= lo)
                .filter(WorkoutRow.date <= hi)
                .order_by(WorkoutRow.date.desc())
                .all()
            )
            return [_to_workout(r) for r in rows]

    def delete(self, workout_id: str, user_id: str | None = None) -> None:
        with self.scope() as db:
            db.delete(self._owned(db, workout_id, user_id))
            db.commit()


class SqlGoalStore(GoalStore):
    def __init__(self, scope: SessionScope, **kwargs):
        super().__init__(**kwargs)
        self.scope = scope

    def list_by_user(self, user_id: str) -> list[Goal]:
        with self.scope() as db:
            rows = (
                db.query(GoalRow)
                .filter(GoalRow.user_id == user_id)
                .order_by(GoalRow.date)
                .all()
            )
            return [_to_goal(r) for r in rows]

    def create(self, user_id: str, data: GoalCreate) -> Goal:
        goal = build_goal(user_id, data, self.clock())
        with self.scope() as db:
            db.add(
                GoalRow(
                    id=goal.id,
                    user_id=user_id,
                    type=goal.type,
                    target=goal.target,
                    current=0,
                    date=goal.date,
                )
            )
            db.commit()
        return goal

    def update_current(self, goal_id: str, new_current: int, user_id: str | None = None) -> Goal:
        check_current(new_current)
        with self.scope() as db:
            query = db.query(GoalRow).filter(GoalRow.id == goal_id)
            if user_id is not None:
                query = query.filter(GoalRow.user_id == user_id)
            row = query.first()
            if not row:
                raise NotFoundError("Goal not found")
            row.current = new_current
            db.commit()
            return _to_goal(row)


class SqlExerciseStore(ExerciseStore):
    def __init__(self, scope: SessionScope):
        self.scope = scope

    def _seed(self, db: Session) -> None:
        if db.query(ExerciseRow).first() is None:
            self._insert_defaults(db)

    def _insert_defaults(self, db: Session) -> None:
        # Fixed primary keys: a concurrent seeder loses on the key instead of duplicating the catalog
        db.add_all([ExerciseRow(id=catalog_id(e["name"]), **e) for e in DEFAULT_EXERCISES])
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info("Exercise catalog already seeded by another session")

    def list_all(self) -> list[Exercise]:
        with self.scope() as db:
            self._seed(db)
            rows = db.query(ExerciseRow).all()
            return [Exercise.model_validate(r) for r in rows]

    def create(self, data: ExerciseCreate) -> Exercise:
        with self.scope() as db:
            self._seed(db)
            row = ExerciseRow(**data.model_dump())
            db.add(row)
            db.commit()
            return Exercise.model_validate(row)
