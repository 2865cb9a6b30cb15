"""Workout aggregation and goal-progress math.

Everything here is a pure function over workouts that were already fetched
for a single user: no storage access, no clock reads (callers pass `now`),
no shared state. Empty input always yields zero results.
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta, tzinfo
from typing import Protocol

from fittrack.core.constants import (
    ACTIVE_TIME_GOAL_TYPES,
    ACTIVITY_CALORIES_WEIGHT,
    ACTIVITY_DURATION_FACTOR,
    ACTIVITY_DURATION_WEIGHT,
    CALORIES_GOAL_TYPES,
    DAY_LABELS,
    MAX_PERCENTAGE,
    MIN_MAX_ACTIVITY_SCORE,
    WORKOUTS_GOAL_TYPES,
)
from fittrack.core.time_utils import civil_date, monday_of, round_half_up
from fittrack.schemas.stats import (
    DailyStats,
    GoalProgress,
    GoalSummary,
    GoalTargets,
    Streak,
    WeeklyDay,
    WeeklySeries,
    WeeklyTotals,
)


class WorkoutLike(Protocol):
    date: datetime
    calories: int
    duration: int


class GoalLike(Protocol):
    type: str
    target: int
    date: datetime


def _sum_day(workouts: Iterable[WorkoutLike]) -> DailyStats:
    count = calories = duration = 0
    for w in workouts:
        count += 1
        calories += w.calories
        duration += w.duration
    return DailyStats(workouts=count, calories=calories, duration=duration)


def _on_day(workouts: Iterable[WorkoutLike], day: date, tz: tzinfo | None) -> list[WorkoutLike]:
    return [w for w in workouts if civil_date(w.date, tz) == day]


def today_stats(
    workouts: Iterable[WorkoutLike], now: datetime, tz: tzinfo | None = None
) -> DailyStats:
    """Count / calories / minutes of the workouts on `now`'s civil date."""
    return _sum_day(_on_day(workouts, civil_date(now, tz), tz))


def week_start(now: datetime, tz: tzinfo | None = None) -> date:
    """Monday of the civil week containing `now` (a Sunday maps six days back)."""
    return monday_of(civil_date(now, tz))


def activity_score(calories: int, duration: int) -> float:
    return (
        calories * ACTIVITY_CALORIES_WEIGHT
        + duration * ACTIVITY_DURATION_FACTOR * ACTIVITY_DURATION_WEIGHT
    )


def weekly_series(
    workouts: Iterable[WorkoutLike], now: datetime, tz: tzinfo | None = None
) -> WeeklySeries:
    """Seven Monday→Sunday buckets for the week containing `now`.

    Workouts outside that week are ignored, so the full history can be
    passed in.
    """
    start = week_start(now, tz)
    by_day: dict[date, list[WorkoutLike]] = {}
    for w in workouts:
        by_day.setdefault(civil_date(w.date, tz), []).append(w)

    days: list[WeeklyDay] = []
    for offset, label in enumerate(DAY_LABELS):
        day = start + timedelta(days=offset)
        stats = _sum_day(by_day.get(day, []))
        days.append(
            WeeklyDay(
                day=label,
                date=day,
                calories=stats.calories,
                workouts=stats.workouts,
                duration=stats.duration,
                activity_score=activity_score(stats.calories, stats.duration),
            )
        )

    max_score = max([d.activity_score for d in days] + [MIN_MAX_ACTIVITY_SCORE])
    totals = WeeklyTotals(
        workouts=sum(d.workouts for d in days),
        calories=sum(d.calories for d in days),
        duration=sum(d.duration for d in days),
        active_days=sum(1 for d in days if d.workouts > 0),
    )
    return WeeklySeries(week_start=start, days=days, max_activity_score=max_score, totals=totals)


def percentage(current: float, target: float) -> int:
    """Whole-number percent of `target` reached, capped at 100. 0 when target <= 0."""
    if target <= 0:
        return 0
    return min(round_half_up(current / target * 100), MAX_PERCENTAGE)


def overall_progress(percentages: Sequence[int]) -> int:
    if not percentages:
        return 0
    return round_half_up(sum(percentages) / len(percentages))


def is_achieved(pct: int) -> bool:
    return pct >= MAX_PERCENTAGE


def goal_progress(current: int, target: int) -> GoalProgress:
    return GoalProgress(current=current, target=target, percentage=percentage(current, target))


def goal_targets(goals: Iterable[GoalLike], defaults: GoalTargets) -> GoalTargets:
    """Daily targets from the user's goals; newest goal of each kind wins.

    Goal kinds with no matching goal keep the value from `defaults`.
    """
    picked: dict[str, GoalLike] = {}
    for g in goals:
        if g.type in CALORIES_GOAL_TYPES:
            key = "calories"
        elif g.type in WORKOUTS_GOAL_TYPES:
            key = "workouts"
        elif g.type in ACTIVE_TIME_GOAL_TYPES:
            key = "active_time"
        else:
            continue
        if key not in picked or g.date >= picked[key].date:
            picked[key] = g

    values = defaults.model_dump()
    for key, g in picked.items():
        values[key] = g.target
    return GoalTargets(**values)


def goal_summary(stats: DailyStats, targets: GoalTargets) -> GoalSummary:
    calories = goal_progress(stats.calories, targets.calories)
    workouts = goal_progress(stats.workouts, targets.workouts)
    active_time = goal_progress(stats.duration, targets.active_time)
    pcts = [calories.percentage, workouts.percentage, active_time.percentage]
    return GoalSummary(
        calories=calories,
        workouts=workouts,
        active_time=active_time,
        overall=overall_progress(pcts),
        achieved=sum(1 for p in pcts if is_achieved(p)),
        total=len(pcts),
    )


def activity_streak(
    workouts: Iterable[WorkoutLike], now: datetime, tz: tzinfo | None = None
) -> Streak:
    """Consecutive civil days with at least one workout.

    The run ends today, or yesterday if nothing has been logged yet today
    (the streak isn't broken until the day is over).
    """
    today = civil_date(now, tz)
    active = {civil_date(w.date, tz) for w in workouts}
    day = today if today in active else today - timedelta(days=1)
    if day not in active:
        return Streak(days=0, last_active=None)

    last_active = day
    count = 0
    while day in active:
        count += 1
        day -= timedelta(days=1)
    return Streak(days=count, last_active=last_active)
