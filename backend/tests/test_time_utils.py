from datetime import date, datetime, time, timedelta, timezone

from fittrack.core.time_utils import (
    civil_date,
    end_of_day,
    ensure_utc,
    monday_of,
    resolve_timezone,
    round_half_up,
    start_of_day,
    week_bounds,
)
from fittrack.schemas.legacy import INTENSITY_MAP, LegacyIntensity, LegacyWorkout, to_workout_create
from fittrack.schemas.workout import Intensity

UTC = timezone.utc
MINUS_5 = timezone(timedelta(hours=-5))


def test_resolve_timezone():
    assert resolve_timezone("local") is None
    assert resolve_timezone(None) is None
    assert resolve_timezone("UTC") is UTC
    assert resolve_timezone("Not/AZone") is None


def test_ensure_utc_assumes_naive_is_utc():
    naive = datetime(2025, 1, 8, 12, 0)
    assert ensure_utc(naive) == datetime(2025, 1, 8, 12, 0, tzinfo=UTC)
    shifted = datetime(2025, 1, 8, 7, 0, tzinfo=MINUS_5)
    assert ensure_utc(shifted).hour == 12


def test_civil_date_depends_on_reference_tz():
    instant = datetime(2025, 1, 9, 3, 0, tzinfo=UTC)
    assert civil_date(instant, UTC) == date(2025, 1, 9)
    assert civil_date(instant, MINUS_5) == date(2025, 1, 8)


def test_monday_of():
    assert monday_of(date(2025, 1, 12)) == date(2025, 1, 6)  # Sunday
    assert monday_of(date(2025, 1, 6)) == date(2025, 1, 6)
    assert monday_of(date(2025, 1, 1)) == date(2024, 12, 30)


def test_end_of_day_from_midnight():
    midnight = datetime(2025, 1, 12, tzinfo=UTC)
    assert end_of_day(midnight, UTC) == datetime.combine(date(2025, 1, 12), time.max, tzinfo=UTC)
    assert end_of_day(date(2025, 1, 12), UTC) == end_of_day(midnight, UTC)
    # already at the end of the day: unchanged
    assert end_of_day(end_of_day(midnight, UTC), UTC) == end_of_day(midnight, UTC)


def test_start_of_day():
    assert start_of_day(date(2025, 1, 6), MINUS_5) == datetime(2025, 1, 6, tzinfo=MINUS_5)


def test_week_bounds():
    start, end = week_bounds(datetime(2025, 1, 12, 20, 0, tzinfo=UTC), UTC)
    assert start == datetime(2025, 1, 6, tzinfo=UTC)
    assert end.date() == date(2025, 1, 12)
    assert end.time() == time.max


def test_round_half_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(44.333) == 44
    assert round_half_up(0.49) == 0
    assert round_half_up(2.5) == 3


def test_legacy_intensity_map_is_complete():
    assert set(INTENSITY_MAP) == set(LegacyIntensity)
    assert INTENSITY_MAP[LegacyIntensity.very_high] is Intensity.high


def test_legacy_to_workout_create():
    legacy = LegacyWorkout.model_validate(
        {
            "exerciseType": "Yoga",
            "duration": 30,
            "caloriesBurned": 90,
            "intensity": "Low",
            "notes": "stretch",
            "workoutDate": "2025-01-06T08:00:00+00:00",
        }
    )
    created = to_workout_create(legacy)
    assert created.calories == 90
    assert created.intensity is Intensity.low
    assert created.notes == "stretch"
    assert created.date == datetime(2025, 1, 6, 8, 0, tzinfo=UTC)
