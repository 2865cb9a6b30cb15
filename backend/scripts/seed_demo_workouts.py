"""Write a block of demo workouts straight into the configured storage.

Usage (from backend/):
    DATABASE_URL=file://data/fittrack.json python -m scripts.seed_demo_workouts --user demo-user
"""
import argparse
import random
from datetime import datetime, time, timedelta

from fittrack.core.config import settings
from fittrack.core.time_utils import monday_of, resolve_timezone
from fittrack.schemas.goal import GoalCreate
from fittrack.schemas.workout import Intensity, WorkoutCreate
from fittrack.storage.factory import build_storage


# weekday -> (exercise, minutes, kcal per minute, intensity)
WEEK_PLAN = {
    0: ("Running", 35, 8, Intensity.medium),
    2: ("Weight Training", 45, 7, Intensity.high),
    3: ("Yoga", 30, 3, Intensity.low),
    5: ("Cycling", 60, 6, Intensity.medium),
}


def seed_demo_workouts(storage, user_id: str, weeks: int = 4) -> int:
    """Insert `weeks` weeks of demo workouts ending with the current week."""
    tz = resolve_timezone(settings.timezone)
    now = datetime.now(tz).astimezone(tz)
    start = monday_of(now.date()) - timedelta(weeks=weeks - 1)

    count = 0
    for week in range(weeks):
        week_start = start + timedelta(weeks=week)
        for dow, (exercise, minutes, kcal_per_min, intensity) in WEEK_PLAN.items():
            day = week_start + timedelta(days=dow)
            # Skip future days
            if day > now.date():
                continue
            minutes = minutes + random.randint(-5, 10)
            when = datetime.combine(day, time(7, 30)).replace(tzinfo=now.tzinfo)
            storage.workouts.create(
                user_id,
                WorkoutCreate(
                    exercise_type=exercise,
                    duration=minutes,
                    calories=minutes * kcal_per_min,
                    intensity=intensity,
                    notes="seed",
                    date=when,
                ),
            )
            count += 1
    return count


def main():
    ap = argparse.ArgumentParser(description="Seed demo workouts and goals")
    ap.add_argument("--user", default="demo-user")
    ap.add_argument("--weeks", type=int, default=4)
    args = ap.parse_args()

    storage = build_storage(settings)
    try:
        added = seed_demo_workouts(storage, args.user, args.weeks)
        if not storage.goals.list_by_user(args.user):
            for goal_type, target in (("daily_calories", 600), ("daily_workouts", 3), ("active_time", 90)):
                storage.goals.create(args.user, GoalCreate(type=goal_type, target=target))
    finally:
        storage.close()

    print(f"Seeded {added} demo workouts for {args.user}")


if __name__ == "__main__":
    main()
