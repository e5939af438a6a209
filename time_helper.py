"""Day-granularity date math pinned to GMT.

Every timestamp handled by the account is a timezone-aware ``datetime`` in
UTC. Only calendar day boundaries matter: two instants on the same UTC day
are zero days apart no matter the time of day.
"""

from __future__ import annotations

from datetime import date, datetime

from dateutil import parser, tz
from dateutil.relativedelta import relativedelta

UTC = tz.tzutc()


def to_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_timestamp(value: datetime | date | int | float | str) -> datetime:
    """Parse a datetime, date, epoch seconds or ISO string into a UTC datetime."""
    if isinstance(value, datetime):
        return to_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=UTC)
    if isinstance(value, str):
        try:
            return to_utc(parser.isoparse(value.strip()))
        except ValueError as exc:
            raise ValueError(f"Not a timestamp: {value!r}") from exc
    raise ValueError(f"Not a timestamp: {value!r}")


def normalize_to_midnight(t: datetime) -> datetime:
    """Return midnight GMT of the day ``t`` falls on."""
    return to_utc(t).replace(hour=0, minute=0, second=0, microsecond=0)


def day_difference(t1: datetime, t2: datetime) -> int:
    """Whole calendar days from ``t2`` to ``t1``.

    Feb 3 23:59 and Feb 7 00:01 are four days apart. The result is negative
    when ``t1`` falls on an earlier day than ``t2``.
    """
    return (normalize_to_midnight(t1) - normalize_to_midnight(t2)).days


def add_days(t: datetime, days: int) -> datetime:
    """Return ``t`` moved ``days`` calendar days, keeping its time of day."""
    return to_utc(t) + relativedelta(days=days)
