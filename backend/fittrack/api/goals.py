from fastapi import APIRouter, Depends

from fittrack.api.deps import get_current_user, get_storage
from fittrack.schemas.goal import Goal, GoalCreate, GoalCurrentUpdate
from fittrack.storage.base import Storage


router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=list[Goal])
def list_goals(
    user_id: str = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.goals.list_by_user(user_id)


@router.post("", response_model=Goal)
def create_goal(
    payload: GoalCreate,
    user_id: str = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    # any `current` in the body is dropped by GoalCreate
    return storage.goals.create(user_id, payload)


@router.patch("/{goal_id}", response_model=Goal)
def update_goal_current(
    goal_id: str,
    payload: GoalCurrentUpdate,
    user_id: str = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Only `current` can change; type and target stay as created."""
    return storage.goals.update_current(goal_id, payload.current, user_id=user_id)
