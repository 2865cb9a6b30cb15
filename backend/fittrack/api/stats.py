"""Aggregated views: today's totals, the weekly chart series, goal progress.

Routes fetch the caller's data and hand it to fittrack.core.aggregation;
all the math lives there.
"""

from datetime import datetime, timedelta, tzinfo

from fastapi import APIRouter, Depends, Query

from fittrack.api.deps import get_current_user, get_now, get_settings, get_storage, get_tz
from fittrack.core import aggregation
from fittrack.core.config import Settings
from fittrack.core.time_utils import civil_date, week_bounds
from fittrack.schemas.stats import DailyStats, GoalSummary, GoalTargets, Streak, WeeklySeries
from fittrack.storage.base import Storage


router = APIRouter(prefix="/stats", tags=["stats"])


def default_targets(settings: Settings) -> GoalTargets:
    return GoalTargets(
        calories=settings.default_calories_target,
        workouts=settings.default_workouts_target,
        active_time=settings.default_active_time_target,
    )


def _todays_workouts(storage: Storage, user_id: str, now: datetime, tz: tzinfo | None):
    today = civil_date(now, tz)
    return storage.workouts.list_by_user_and_date_range(user_id, today, today)


@router.get("/today", response_model=DailyStats)
def get_today_stats(
    user_id: str = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    now: datetime = Depends(get_now),
    tz: tzinfo | None = Depends(get_tz),
):
    return aggregation.today_stats(_todays_workouts(storage, user_id, now, tz), now, tz)


@router.get("/weekly", response_model=WeeklySeries)
def get_weekly_series(
    user_id: str = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    now: datetime = Depends(get_now),
    tz: tzinfo | None = Depends(get_tz),
):
    start, end = week_bounds(now, tz)
    workouts = storage.workouts.list_by_user_and_date_range(user_id, start, end)
    return aggregation.weekly_series(workouts, now, tz)


@router.get("/goals", response_model=GoalSummary)
def get_goal_progress(
    user_id: str = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
    now: datetime = Depends(get_now),
    tz: tzinfo | None = Depends(get_tz),
):
    """Live progress of today's calories / workouts / active time against targets.

    Targets come from the caller's goals, falling back to the configured
    defaults. The stored `current` of a goal is not used here.
    """
    stats = aggregation.today_stats(_todays_workouts(storage, user_id, now, tz), now, tz)
    targets = aggregation.goal_targets(storage.goals.list_by_user(user_id), default_targets(settings))
    return aggregation.goal_summary(stats, targets)


@router.get("/streak", response_model=Streak)
def get_streak(
    days: int = Query(366, ge=1),
    user_id: str = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    now: datetime = Depends(get_now),
    tz: tzinfo | None = Depends(get_tz),
):
    """Consecutive active days up to today, looking back at most `days` days."""
    today = civil_date(now, tz)
    workouts = storage.workouts.list_by_user_and_date_range(
        user_id, today - timedelta(days=days), today
    )
    return aggregation.activity_streak(workouts, now, tz)
