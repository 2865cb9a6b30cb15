"""FastAPI dependencies: everything a route needs comes from app.state."""

from datetime import datetime, tzinfo
from typing import Optional

from fastapi import Header, Request

from fittrack.core.config import Settings
from fittrack.core.errors import AuthError
from fittrack.storage.base import Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_tz(request: Request) -> tzinfo | None:
    return request.app.state.tz


def get_now(request: Request) -> datetime:
    return request.app.state.clock()


def get_current_user(
    request: Request,
    x_user_id: Optional[str] = Header(None),
) -> str:
    """The caller's user id, from the X-User-Id header.

    Stands in for a real session layer. Falls back to DEFAULT_USER_ID when
    configured; otherwise a request without a user is rejected before any
    store is touched.
    """
    user_id = (x_user_id or "").strip() or get_settings(request).default_user_id
    if not user_id:
        raise AuthError("Not authenticated")
    return user_id
