import logging
import math
from datetime import date, datetime, time, timedelta, timezone, tzinfo

logger = logging.getLogger(__name__)


def resolve_timezone(tz_name: str | None) -> tzinfo | None:
    """Turn a configured timezone name into a tzinfo.

    - 'local' or None: returns None, meaning the system local timezone
      (``datetime.astimezone(None)`` keeps DST transitions right).
    - 'UTC': ``timezone.utc``.
    - IANA name (e.g. 'America/New_York'): a ZoneInfo.
    Unknown names fall back to the system timezone with a warning.
    """
    if not tz_name or tz_name == "local":
        return None
    if tz_name.upper() == "UTC":
        return timezone.utc
    from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using system local time", tz_name)
        return None


def ensure_utc(dt: datetime) -> datetime:
    """Return `dt` as an aware UTC datetime. Naive values are assumed to be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_local_datetime(dt: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert a datetime (assume UTC if naive) to the reference timezone."""
    return ensure_utc(dt).astimezone(tz)


def civil_date(dt: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of `dt` as seen in the reference timezone.

    This is the only "same day" test used anywhere: comparing civil dates
    instead of subtracting instants keeps day boundaries right across offsets.
    """
    return to_local_datetime(dt, tz).date()


def monday_of(d: date) -> date:
    # Monday = 0, Sunday = 6
    return d - timedelta(days=d.weekday())


def start_of_day(d: date, tz: tzinfo | None = None) -> datetime:
    """Civil midnight of `d` in the reference timezone, as an aware datetime."""
    if tz is None:
        return datetime.combine(d, time.min).astimezone()
    return datetime.combine(d, time.min, tzinfo=tz)


def end_of_day(value: date | datetime, tz: tzinfo | None = None) -> datetime:
    """Last instant of the civil day containing `value`.

    Accepts a plain date or a datetime. A datetime sitting at midnight is
    extended to the end of that same day rather than treated as an exclusive
    bound.
    """
    d = civil_date(value, tz) if isinstance(value, datetime) else value
    if tz is None:
        return datetime.combine(d, time.max).astimezone()
    return datetime.combine(d, time.max, tzinfo=tz)


def week_bounds(now: datetime, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """(Monday 00:00, Sunday 23:59:59.999999) of the week containing `now`."""
    monday = monday_of(civil_date(now, tz))
    return start_of_day(monday, tz), end_of_day(monday + timedelta(days=6), tz)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (round(2.5) == 2 in Python)."""
    return int(math.floor(value + 0.5))
