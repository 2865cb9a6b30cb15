import os
from datetime import datetime, timezone

import pytest

# Must be set before fittrack.main is imported: it builds an app at import time
os.environ.setdefault("DATABASE_URL", "memory://")

from fittrack.core.config import Settings  # noqa: E402
from fittrack.schemas.workout import Workout  # noqa: E402
from fittrack.storage.factory import build_storage  # noqa: E402

# Wednesday; the week runs Mon 2025-01-06 .. Sun 2025-01-12
NOW = datetime(2025, 1, 8, 15, 0, tzinfo=timezone.utc)


def fixed_clock():
    return NOW


def make_workout(when: datetime, calories: int = 100, duration: int = 20, user_id: str = "alice", **extra) -> Workout:
    """A stored-looking workout for feeding the aggregation functions."""
    fields = {
        "id": f"w-{when.isoformat()}-{calories}-{duration}",
        "user_id": user_id,
        "exercise_type": "Running",
        "duration": duration,
        "calories": calories,
        "intensity": "medium",
        "notes": None,
        "date": when,
    }
    fields.update(extra)
    return Workout.model_validate(fields)


@pytest.fixture
def settings():
    return Settings(database_url="memory://", timezone="UTC", log_level="WARNING")


@pytest.fixture
def client(settings):
    from fastapi.testclient import TestClient
    from fittrack.main import create_app

    app = create_app(settings, clock=fixed_clock)
    return TestClient(app, headers={"X-User-Id": "alice"})


@pytest.fixture(params=["memory", "file", "sqlite"])
def storage(request, tmp_path):
    """The same store contract, exercised against every backend."""
    urls = {
        "memory": "memory://",
        "file": f"file://{tmp_path / 'fittrack.json'}",
        "sqlite": "sqlite+pysqlite:///:memory:",
    }
    built = build_storage(
        Settings(database_url=urls[request.param], timezone="UTC"),
        clock=fixed_clock,
    )
    yield built
    built.close()
