"""Derived views produced by the aggregation functions. Never persisted."""

from datetime import date

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Derived(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class DailyStats(_Derived):
    workouts: int = 0
    calories: int = 0
    duration: int = 0


class GoalProgress(_Derived):
    current: int
    target: int
    percentage: int


class GoalTargets(_Derived):
    calories: int
    workouts: int
    active_time: int


class GoalSummary(_Derived):
    calories: GoalProgress
    workouts: GoalProgress
    active_time: GoalProgress
    overall: int
    achieved: int  # categories at 100 %
    total: int


class WeeklyDay(_Derived):
    day: str  # "Mon".."Sun"
    date: date
    calories: int
    workouts: int
    duration: int
    activity_score: float


class WeeklyTotals(_Derived):
    workouts: int
    calories: int
    duration: int
    active_days: int


class WeeklySeries(_Derived):
    week_start: date
    days: list[WeeklyDay]
    max_activity_score: float
    totals: WeeklyTotals


class Streak(_Derived):
    days: int
    last_active: date | None = None
