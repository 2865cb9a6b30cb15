"""Tests for the aggregation functions."""

from datetime import date, datetime, timedelta, timezone

import pytest

from conftest import NOW, make_workout
from fittrack.core import aggregation
from fittrack.schemas.stats import DailyStats, GoalTargets

UTC = timezone.utc
MONDAY = datetime(2025, 1, 6, 8, 0, tzinfo=UTC)
DEFAULT_TARGETS = GoalTargets(calories=600, workouts=3, active_time=90)


class TestWeekStart:
    def test_sunday_maps_to_previous_monday(self):
        sunday = datetime(2025, 1, 12, 18, 0, tzinfo=UTC)
        assert aggregation.week_start(sunday, UTC) == date(2025, 1, 6)
        assert aggregation.week_start(sunday, UTC) == sunday.date() - timedelta(days=6)

    def test_monday_is_its_own_week_start(self):
        assert aggregation.week_start(MONDAY, UTC) == date(2025, 1, 6)

    def test_midweek(self):
        assert aggregation.week_start(NOW, UTC) == date(2025, 1, 6)

    def test_uses_reference_timezone(self):
        # Monday 02:00 UTC is still Sunday evening in UTC-5
        early_monday = datetime(2025, 1, 13, 2, 0, tzinfo=UTC)
        new_york = timezone(timedelta(hours=-5))
        assert aggregation.week_start(early_monday, UTC) == date(2025, 1, 13)
        assert aggregation.week_start(early_monday, new_york) == date(2025, 1, 6)


class TestTodayStats:
    def test_empty(self):
        assert aggregation.today_stats([], NOW, UTC) == DailyStats(workouts=0, calories=0, duration=0)

    def test_only_counts_today(self):
        workouts = [
            make_workout(NOW.replace(hour=6), calories=200, duration=30),
            make_workout(NOW.replace(hour=23, minute=59), calories=50, duration=10),
            make_workout(NOW - timedelta(days=1), calories=999, duration=99),
            make_workout(NOW + timedelta(days=1), calories=999, duration=99),
        ]
        stats = aggregation.today_stats(workouts, NOW, UTC)
        assert stats == DailyStats(workouts=2, calories=250, duration=40)

    def test_civil_date_in_reference_timezone(self):
        # 23:30 local on Jan 8 in UTC-5 is already Jan 9 in UTC,
        # while 18:00 local (23:00 UTC) is still Jan 8 in both
        new_york = timezone(timedelta(hours=-5))
        late = datetime(2025, 1, 8, 23, 30, tzinfo=new_york)
        now = datetime(2025, 1, 8, 18, 0, tzinfo=new_york)
        workouts = [make_workout(late, calories=300, duration=45)]

        assert aggregation.today_stats(workouts, now, new_york).workouts == 1
        assert aggregation.today_stats(workouts, now, UTC).workouts == 0


class TestWeeklySeries:
    def test_monday_bucket(self):
        workouts = [
            make_workout(MONDAY, calories=100, duration=20),
            make_workout(MONDAY.replace(hour=18), calories=50, duration=10),
        ]
        series = aggregation.weekly_series(workouts, MONDAY, UTC)

        mon = series.days[0]
        assert mon.day == "Mon"
        assert mon.date == date(2025, 1, 6)
        assert (mon.calories, mon.duration, mon.workouts) == (150, 30, 2)
        assert mon.activity_score == pytest.approx(96)

    def test_seven_days_monday_to_sunday(self):
        series = aggregation.weekly_series([], NOW, UTC)
        assert [d.day for d in series.days] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert series.days[-1].date == date(2025, 1, 12)
        assert series.week_start == date(2025, 1, 6)

    def test_empty_week(self):
        series = aggregation.weekly_series([], NOW, UTC)
        assert all(d.workouts == 0 and d.activity_score == 0 for d in series.days)
        assert series.max_activity_score == 50
        assert series.totals.workouts == 0
        assert series.totals.active_days == 0

    def test_max_score_floor_and_peak(self):
        light = aggregation.weekly_series([make_workout(MONDAY, calories=10, duration=5)], NOW, UTC)
        assert light.max_activity_score == 50

        heavy = aggregation.weekly_series([make_workout(MONDAY, calories=500, duration=60)], NOW, UTC)
        assert heavy.max_activity_score == pytest.approx(500 * 0.4 + 60 * 2 * 0.6)

    def test_sum_matches_workouts_inside_week(self):
        week_start = datetime(2025, 1, 6, tzinfo=UTC)
        workouts = [
            make_workout(week_start - timedelta(minutes=1), calories=1000),  # Sunday before
            make_workout(week_start, calories=120),
            make_workout(week_start + timedelta(days=3, hours=12), calories=80),
            make_workout(week_start + timedelta(days=6, hours=23, minutes=59), calories=40),
            make_workout(week_start + timedelta(days=7), calories=2000),  # next Monday
        ]
        series = aggregation.weekly_series(workouts, NOW, UTC)

        inside = [
            w.calories for w in workouts
            if week_start <= w.date < week_start + timedelta(days=7)
        ]
        assert sum(d.calories for d in series.days) == sum(inside) == 240
        assert series.totals.calories == 240
        assert series.totals.active_days == 3

    def test_idempotent(self):
        workouts = [make_workout(MONDAY + timedelta(days=i), calories=10 * i, duration=i + 1) for i in range(7)]
        first = aggregation.weekly_series(workouts, NOW, UTC)
        second = aggregation.weekly_series(workouts, NOW, UTC)
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()


class TestPercentage:
    def test_zero_target(self):
        for current in (0, 1, 50, 10_000):
            assert aggregation.percentage(current, 0) == 0

    def test_negative_target(self):
        assert aggregation.percentage(10, -5) == 0

    def test_monotone_and_saturates(self):
        target = 7
        values = [aggregation.percentage(c, target) for c in range(0, 30)]
        assert values == sorted(values)
        assert aggregation.percentage(target, target) == 100
        assert all(v == 100 for v in values[target:])

    def test_rounds_half_up(self):
        # 1/8 = 12.5 %; Python's round() would give 12
        assert aggregation.percentage(1, 8) == 13
        assert aggregation.percentage(1, 3) == 33

    def test_overall_progress(self):
        assert aggregation.overall_progress([50, 33, 50]) == 44
        assert aggregation.overall_progress([]) == 0

    def test_is_achieved(self):
        assert aggregation.is_achieved(100)
        assert not aggregation.is_achieved(99)


class TestGoalSummary:
    def test_single_workout_today(self):
        stats = aggregation.today_stats([make_workout(NOW, calories=300, duration=45)], NOW, UTC)
        summary = aggregation.goal_summary(stats, DEFAULT_TARGETS)

        assert summary.calories.percentage == 50
        assert summary.workouts.percentage == 33
        assert summary.active_time.percentage == 50
        assert summary.overall == 44
        assert (summary.achieved, summary.total) == (0, 3)

    def test_empty_day(self):
        summary = aggregation.goal_summary(DailyStats(), DEFAULT_TARGETS)
        assert summary.overall == 0
        assert summary.calories.current == 0

    def test_achieved_count(self):
        stats = DailyStats(workouts=1, calories=700, duration=90)
        summary = aggregation.goal_summary(stats, DEFAULT_TARGETS)
        assert summary.calories.percentage == 100
        assert summary.active_time.percentage == 100
        assert summary.achieved == 2

    def test_zero_target_is_safe(self):
        targets = GoalTargets(calories=0, workouts=0, active_time=0)
        summary = aggregation.goal_summary(DailyStats(workouts=2, calories=100, duration=10), targets)
        assert summary.overall == 0


class TestGoalTargets:
    def _goal(self, type_, target, when):
        from fittrack.schemas.goal import Goal

        return Goal(id=f"g-{type_}-{target}", user_id="alice", type=type_, target=target, current=0, date=when)

    def test_defaults_when_no_goals(self):
        assert aggregation.goal_targets([], DEFAULT_TARGETS) == DEFAULT_TARGETS

    def test_newest_goal_per_kind_wins(self):
        goals = [
            self._goal("daily_calories", 400, NOW - timedelta(days=2)),
            self._goal("calories", 800, NOW - timedelta(days=1)),
            self._goal("activeTime", 45, NOW),
            self._goal("weekly_workouts", 5, NOW),
        ]
        targets = aggregation.goal_targets(goals, DEFAULT_TARGETS)
        assert targets == GoalTargets(calories=800, workouts=3, active_time=45)


class TestActivityStreak:
    def test_no_workouts(self):
        streak = aggregation.activity_streak([], NOW, UTC)
        assert streak.days == 0
        assert streak.last_active is None

    def test_counts_back_from_today(self):
        workouts = [make_workout(NOW - timedelta(days=i)) for i in range(3)]
        workouts.append(make_workout(NOW - timedelta(days=5)))
        streak = aggregation.activity_streak(workouts, NOW, UTC)
        assert streak.days == 3
        assert streak.last_active == date(2025, 1, 8)

    def test_today_not_logged_yet(self):
        workouts = [make_workout(NOW - timedelta(days=i)) for i in (1, 2)]
        streak = aggregation.activity_streak(workouts, NOW, UTC)
        assert streak.days == 2
        assert streak.last_active == date(2025, 1, 7)

    def test_broken_streak(self):
        workouts = [make_workout(NOW - timedelta(days=2))]
        assert aggregation.activity_streak(workouts, NOW, UTC).days == 0
