import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fittrack.api.exercises import router as exercises_router
from fittrack.api.goals import router as goals_router
from fittrack.api.stats import router as stats_router
from fittrack.api.workouts import router as workouts_router
from fittrack.core.config import Settings, settings as default_settings
from fittrack.core.errors import FitTrackError
from fittrack.core.time_utils import resolve_timezone
from fittrack.storage.base import Clock, Storage, utc_now
from fittrack.storage.factory import build_storage

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    settings: Settings | None = None,
    storage: Storage | None = None,
    clock: Clock = utc_now,
) -> FastAPI:
    """Build the application around an explicitly constructed storage backend.

    When `storage` is omitted it is built from `settings.database_url`; a
    missing URL raises StorageConfigError here, at startup.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)
    if storage is None:
        storage = build_storage(settings, clock=clock)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        storage.close()

    app = FastAPI(title="FitTrack", lifespan=lifespan)
    app.state.settings = settings
    app.state.storage = storage
    app.state.clock = clock
    app.state.tz = resolve_timezone(settings.timezone)

    # Allow CORS for local frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(FitTrackError)
    async def fittrack_error_handler(request: Request, exc: FitTrackError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    app.include_router(workouts_router)
    app.include_router(exercises_router)
    app.include_router(goals_router)
    app.include_router(stats_router)

    @app.get("/")
    def root():
        return {"message": "FitTrack backend is running", "storage": storage.backend}

    return app


app = create_app()
