"""Shared application constants.

Centralizes the weights, floors and defaults used by the aggregation
functions so we can document and adjust them in one place.
"""

# Weekday labels, Monday first (matches date.weekday())
DAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

# Activity score = calories * CAL_WEIGHT + duration * DURATION_FACTOR * DURATION_WEIGHT
# Duration is weighted more heavily than raw calories.
ACTIVITY_CALORIES_WEIGHT = 0.4
ACTIVITY_DURATION_FACTOR = 2
ACTIVITY_DURATION_WEIGHT = 0.6

# Lower bound for the chart scale so a single light day doesn't render at full
# height, and an empty week never divides by zero.
MIN_MAX_ACTIVITY_SCORE = 50

# Percentages are capped here
MAX_PERCENTAGE = 100

# Goal type aliases grouped by the daily category they feed
CALORIES_GOAL_TYPES = ("daily_calories", "calories")
WORKOUTS_GOAL_TYPES = ("daily_workouts", "workouts")
ACTIVE_TIME_GOAL_TYPES = ("active_time", "activeTime")

# Catalog seeded into an empty exercise store
DEFAULT_EXERCISES = [
    {"name": "Running", "category": "cardio", "calories_per_minute": 8, "emoji": "🏃"},
    {"name": "Push-ups", "category": "strength", "calories_per_minute": 5, "emoji": "💪"},
    {"name": "Yoga", "category": "flexibility", "calories_per_minute": 3, "emoji": "🧘"},
    {"name": "HIIT", "category": "cardio", "calories_per_minute": 12, "emoji": "⚡"},
    {"name": "Cycling", "category": "cardio", "calories_per_minute": 6, "emoji": "🚴"},
    {"name": "Swimming", "category": "cardio", "calories_per_minute": 10, "emoji": "🏊"},
    {"name": "Weight Training", "category": "strength", "calories_per_minute": 7, "emoji": "🏋️"},
    {"name": "Pilates", "category": "flexibility", "calories_per_minute": 4, "emoji": "🤸"},
]
