"""Build the storage backend named by the DATABASE_URL setting."""

import logging

from fittrack.core.config import Settings
from fittrack.core.errors import StorageConfigError
from fittrack.core.time_utils import resolve_timezone
from fittrack.storage.base import Clock, Storage, utc_now

logger = logging.getLogger(__name__)

MEMORY_URL = "memory://"
FILE_PREFIX = "file://"


def build_storage(settings: Settings, clock: Clock = utc_now) -> Storage:
    """Create the workout, goal and exercise stores for the configured backend.

    Supported values:
    - ``memory://``: InMemory*Store
    - ``file://<path>`` or a path ending in ``.json``: JsonFile*Store
    - any other value is handed to SQLAlchemy (tables are created if missing)

    Raises:
        StorageConfigError: DATABASE_URL is blank. This is a startup failure,
        never something an API caller sees.
    """
    url = (settings.database_url or "").strip()
    if not url:
        raise StorageConfigError(
            "DATABASE_URL is not set. Use memory://, file://<path>.json or a SQLAlchemy URL."
        )
    tz = resolve_timezone(settings.timezone)

    if url == MEMORY_URL:
        from fittrack.storage.memory import (
            InMemoryExerciseStore,
            InMemoryGoalStore,
            InMemoryWorkoutStore,
        )

        logger.info("Using in-memory storage")
        return Storage(
            workouts=InMemoryWorkoutStore(tz=tz, clock=clock),
            goals=InMemoryGoalStore(clock=clock),
            exercises=InMemoryExerciseStore(),
            backend="memory",
        )

    if url.startswith(FILE_PREFIX) or url.endswith(".json"):
        from fittrack.storage.json_file import (
            JsonDocument,
            JsonFileExerciseStore,
            JsonFileGoalStore,
            JsonFileWorkoutStore,
        )

        path = url[len(FILE_PREFIX):] if url.startswith(FILE_PREFIX) else url
        if not path:
            raise StorageConfigError("file:// storage needs a path, e.g. file://data/fittrack.json")
        document = JsonDocument(path)
        logger.info("Using file storage at %s", document.path)
        return Storage(
            workouts=JsonFileWorkoutStore(document, tz=tz, clock=clock),
            goals=JsonFileGoalStore(document, clock=clock),
            exercises=JsonFileExerciseStore(document),
            backend="file",
        )

    from sqlalchemy.exc import ArgumentError

    from fittrack.db import Base, make_engine, make_session_factory
    from fittrack.models.exercise import ExerciseRow  # noqa: F401  (import ensures table is registered)
    from fittrack.models.goal import GoalRow  # noqa: F401
    from fittrack.models.workout import WorkoutRow  # noqa: F401
    from fittrack.storage.sql import SessionScope, SqlExerciseStore, SqlGoalStore, SqlWorkoutStore

    try:
        engine = make_engine(url, pool_size=settings.pool_size, pool_timeout=settings.pool_timeout)
    except ArgumentError as e:
        raise StorageConfigError(f"Invalid DATABASE_URL: {e}") from e

    # Create DB tables on startup
    Base.metadata.create_all(bind=engine)
    logger.info("Using SQL storage (%s)", engine.url.render_as_string(hide_password=True))

    scope = SessionScope(make_session_factory(engine))
    return Storage(
        workouts=SqlWorkoutStore(scope, tz=tz, clock=clock),
        goals=SqlGoalStore(scope, clock=clock),
        exercises=SqlExerciseStore(scope),
        backend="sql",
        _closers=[engine.dispose],
    )
