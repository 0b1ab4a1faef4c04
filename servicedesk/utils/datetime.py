"""Timestamp helpers bound to the configured application timezone.

Notification rows store naive datetimes expressed in the app timezone while
entities, API payloads and the client cache always carry aware values.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from servicedesk.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone named by ``APP_TIMEZONE``.

    Accepts IANA names (``America/Lima``) and fixed offsets (``UTC-05:00``);
    anything else falls back to UTC.
    """

    name = (get_settings().app_timezone or "").strip()
    return _parse_timezone(name) if name else timezone.utc


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Current time in the app timezone, ready for a naive ``DateTime`` column."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert ``value`` to the app timezone.

    Naive values are assumed to already be app-local, which is how the
    notification table stores them.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Inverse of :func:`ensure_app_timezone` used when writing rows."""

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


def _parse_timezone(name: str) -> tzinfo:
    match = _OFFSET_PATTERN.match(name)
    if match:
        offset = timedelta(
            hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
        )
        return timezone(-offset if match.group("sign") == "-" else offset)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(_DEFAULT_TIMEZONE)
