from fastapi import APIRouter, Depends

from fittrack.api.deps import get_current_user, get_storage
from fittrack.schemas.exercise import Exercise, ExerciseCreate
from fittrack.storage.base import Storage


router = APIRouter(prefix="/exercises", tags=["exercises"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=list[Exercise])
def list_exercises(storage: Storage = Depends(get_storage)):
    """The shared exercise catalog (seeded with the defaults on first read)."""
    return storage.exercises.list_all()


@router.post("", response_model=Exercise)
def create_exercise(payload: ExerciseCreate, storage: Storage = Depends(get_storage)):
    return storage.exercises.create(payload)
