from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Storage connection string. Selects the backend:
    #   memory://                 in-process dicts (lost on restart)
    #   file://data/fittrack.json JSON document on disk
    #   anything else             SQLAlchemy URL, e.g. postgresql+psycopg2://...
    database_url: str = ""

    # Connection pool (SQL backend only)
    pool_size: int = 10
    pool_timeout: float = 20.0  # seconds to wait for a pooled connection

    # Reference timezone for civil-date comparisons ("is this today / this week").
    # Examples: "America/New_York", "Europe/London", or "local" to use system tz.
    timezone: str = "local"

    # Development fallback when a request carries no X-User-Id header.
    default_user_id: str | None = None

    log_level: str = "INFO"

    # Daily targets used when the user has not set a goal of that kind
    default_calories_target: int = 600
    default_workouts_target: int = 3
    default_active_time_target: int = 90

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Allow empty env strings for optional fields
    @field_validator("default_user_id", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v in ("", None, "null", "None"):
            return None
        return v


settings = Settings()
