import uuid

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

# SQLAlchemy Base class for models to inherit
Base = declarative_base()


def new_id() -> str:
    """Primary keys are opaque uuid4 strings in every backend."""
    return str(uuid.uuid4())


def catalog_id(name: str) -> str:
    """Stable id for a built-in catalog exercise, the same on every seeding."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"fittrack:exercise:{name}"))


def make_engine(database_url: str, pool_size: int = 10, pool_timeout: float = 20.0) -> Engine:
    """Create the engine for a SQL storage backend.

    Server databases get a bounded pool with no overflow, so a burst of
    requests waits at most `pool_timeout` seconds for a connection and then
    fails instead of queuing forever.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url:
            # one shared connection, otherwise every session sees an empty db
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,   # helps avoid stale connections
        pool_size=pool_size,
        max_overflow=0,
        pool_timeout=pool_timeout,
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
