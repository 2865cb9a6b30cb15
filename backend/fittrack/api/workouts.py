import logging
from datetime import datetime, tzinfo

from fastapi import APIRouter, Depends, status

from fittrack.api.deps import get_current_user, get_now, get_storage, get_tz
from fittrack.core.time_utils import week_bounds
from fittrack.schemas.legacy import LegacyWorkout, to_workout_create
from fittrack.schemas.workout import Workout, WorkoutCreate, WorkoutUpdate
from fittrack.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.get("", response_model=list[Workout])
def list_workouts(
    user_id: str = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """All workouts of the caller, most recent first."""
    return storage.workouts.list_by_user(user_id)


@router.post("", response_model=Workout)
def create_workout(
    payload: WorkoutCreate,
    user_id: str = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.workouts.create(user_id, payload)


@router.get("/weekly", response_model=list[Workout])
def list_weekly_workouts(
    user_id: str = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    now: datetime = Depends(get_now),
    tz: tzinfo | None = Depends(get_tz),
):
    """Workouts of the current Monday–Sunday week."""
    start, end = week_bounds(now, tz)
    logger.info("Weekly range for %s: %s to %s", user_id, start.isoformat(), end.isoformat())
    workouts = storage.workouts.list_by_user_and_date_range(user_id, start, end)
    logger.debug("Found %d workouts", len(workouts))
    return workouts


@router.post("/import", response_model=list[Workout])
def import_legacy_workouts(
    payload: list[LegacyWorkout],
    user_id: str = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Import workouts exported by the standalone client (caloriesBurned / workoutDate)."""
    created = [storage.workouts.create(user_id, to_workout_create(item)) for item in payload]
    logger.info("Imported %d legacy workouts for %s", len(created), user_id)
    return created


@router.patch("/{workout_id}", response_model=Workout)
def update_workout(
    workout_id: str,
    payload: WorkoutUpdate,
    user_id: str = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.workouts.update(workout_id, payload.model_dump(exclude_unset=True), user_id=user_id)


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_workout(
    workout_id: str,
    user_id: str = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    storage.workouts.delete(workout_id, user_id=user_id)
