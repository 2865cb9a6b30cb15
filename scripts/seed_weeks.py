#!/usr/bin/env python3
"""
Seed several weeks of training data into the FitTrack API.

Pattern per week (Mon–Sun):
  - Mon: running
  - Tue: yoga
  - Wed: HIIT
  - Thu: rest
  - Fri: weight training
  - Sat: long ride
  - Sun: rest

Weekly load ramps up by ~10% per week from the starting volume.

Usage examples:
  - Against a local backend:
      python scripts/seed_weeks.py --base-url http://localhost:8000 --user demo-user
  - Also create the three daily goals:
      python scripts/seed_weeks.py --base-url http://localhost:8000 --user demo-user --goals
"""

from __future__ import annotations

import argparse
import datetime as dt
import sys

try:
    import requests  # type: ignore
except ImportError:  # pragma: no cover
    print("This script requires the 'requests' package.\nInstall with: pip install requests", file=sys.stderr)
    raise


# weekday -> (exercise, base minutes, kcal per minute, intensity)
WEEK_PLAN = {
    0: ("Running", 30, 8, "medium"),
    1: ("Yoga", 30, 3, "low"),
    2: ("HIIT", 20, 12, "high"),
    4: ("Weight Training", 40, 7, "medium"),
    5: ("Cycling", 60, 6, "medium"),
}

DAILY_GOALS = {"daily_calories": 600, "daily_workouts": 3, "active_time": 90}


def monday_of_week(d: dt.date) -> dt.date:
    return d - dt.timedelta(days=d.weekday())


def post_json(base_url: str, path: str, user: str, payload: dict) -> dict:
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    r = requests.post(url, json=payload, headers={"X-User-Id": user}, timeout=15)
    if r.status_code >= 300:
        raise RuntimeError(f"{path} -> HTTP {r.status_code}: {r.text}")
    return r.json()


def seed_week(base_url: str, user: str, week_start: dt.date, scale: float, today: dt.date) -> int:
    added = 0
    for dow, (exercise, minutes, kcal_per_min, intensity) in WEEK_PLAN.items():
        day = week_start + dt.timedelta(days=dow)
        if day > today:
            continue
        duration = max(1, int(minutes * scale))
        payload = {
            "exerciseType": exercise,
            "duration": duration,
            "calories": duration * kcal_per_min,
            "intensity": intensity,
            "notes": "seed",
            "date": dt.datetime.combine(day, dt.time(7, 0), tzinfo=dt.timezone.utc).isoformat(),
        }
        post_json(base_url, "workouts", user, payload)
        added += 1
    return added


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed weeks of workouts (and optionally goals)")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g., http://localhost:8000)")
    ap.add_argument("--user", default="demo-user", help="Value sent as X-User-Id")
    ap.add_argument("--weeks", type=int, default=8)
    ap.add_argument("--goals", action="store_true", help="Also create the daily goals")
    args = ap.parse_args()

    today = dt.date.today()
    this_monday = monday_of_week(today)
    week_starts = [this_monday - dt.timedelta(weeks=args.weeks - 1 - i) for i in range(args.weeks)]

    total = 0
    for i, ws in enumerate(week_starts):
        total += seed_week(args.base_url, args.user, ws, 1.1 ** i, today)

    if args.goals:
        for goal_type, target in DAILY_GOALS.items():
            post_json(args.base_url, "goals", args.user, {"type": goal_type, "target": target})

    print(f"Seed complete: {total} workouts over {args.weeks} weeks.")


if __name__ == "__main__":
    main()
