from __future__ import annotations

from datetime import date, datetime, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ConfigurationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def load_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown timezone: {name!r}") from exc


def parse_timestamp(value, tz: tzinfo) -> datetime:
    """Parse a stored timestamp into an aware datetime.

    Accepts datetimes and ISO-8601 strings (a trailing 'Z' means UTC).
    Naive values are read as employer-local time. Raises ValueError/TypeError
    on anything else.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        dt = datetime.fromisoformat(raw)
    else:
        raise TypeError(f"Unsupported timestamp value: {value!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt


def local_date_key(dt: datetime, tz: tzinfo) -> str:
    """Employer-local calendar date as YYYY-MM-DD."""
    return dt.astimezone(tz).date().isoformat()


def date_key_from_value(value, tz: tzinfo) -> str:
    """Normalize a stored work date (date, 'YYYY-MM-DD' or full timestamp) to YYYY-MM-DD."""
    if isinstance(value, datetime):
        return local_date_key(parse_timestamp(value, tz), tz)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str) and len(value.strip()) == 10:
        return parse_iso_date(value.strip()).isoformat()
    return local_date_key(parse_timestamp(value, tz), tz)
