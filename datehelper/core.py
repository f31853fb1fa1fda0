"""Normalization of date-like values and the arithmetic built on it.

Every public function accepts a "date-like" value and funnels it through
:func:`create`, which always yields a timezone-aware ``datetime``.
"""

import logging
import math
import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import TypeAlias

import dateparser
from dateutil import parser as date_parser

from datehelper.config import Zone, zone
from datehelper.util import SNAP_INTERVAL

logger = logging.getLogger(__name__)

DateLike: TypeAlias = datetime | date | int | float | str | None

# Optional sign, digits, decimal part and exponent
_NUMERIC = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


class DateParseError(ValueError):
    """Raised by :func:`parse` when a value cannot be read as a date."""


def parse(when: DateLike = None, tz: Zone | None = None) -> datetime:
    """Normalize a date-like value into a timezone-aware datetime.

    Accepts:
    - aware datetime: returned as-is
    - naive datetime: wall-clock time in ``tz`` (or the default zone)
    - date: midnight of that day in ``tz``
    - int/float or numeric string: unix timestamp in seconds
    - "@<seconds>": unix timestamp in seconds
    - absolute date strings, read by python-dateutil
    - natural-language expressions ("now", "tomorrow", "3 days ago",
      "in 2 hours"), read by dateparser relative to the current time
    - None: the current time

    Unix timestamps are returned in UTC unless ``tz`` is given, in which
    case they are converted to it. Parsed strings that carry their own
    offset keep it.

    Raises:
        DateParseError: If the value cannot be interpreted as a date
        ValueError: If ``tz`` is an unknown zone name
    """
    if isinstance(when, datetime):
        if when.tzinfo is not None:
            return when
        return when.replace(tzinfo=zone(tz))
    if isinstance(when, date):
        return datetime.combine(when, time.min, tzinfo=zone(tz))
    if isinstance(when, bool):
        raise DateParseError(f"Cannot interpret a bool as a date: {when!r}")
    if when is None:
        return datetime.now(zone(tz))
    if isinstance(when, (int, float)):
        when = f"@{when}"
    elif not isinstance(when, str):
        raise DateParseError(
            f"Unsupported date-like type {type(when).__name__!r}: {when!r}\n"
            f"Expected datetime, date, int, float, str or None"
        )
    elif _NUMERIC.match(when):
        when = "@" + when.strip()

    text = when.strip()
    if text.startswith("@"):
        dt = _from_timestamp(text[1:])
        # Timestamps are absolute; an explicit zone only changes the view
        return dt.astimezone(zone(tz)) if tz is not None else dt

    if not text:
        raise DateParseError("Cannot parse an empty string as a date")
    target = zone(tz)
    try:
        dt = date_parser.parse(text)
    except (ValueError, OverflowError):
        dt = _parse_natural(text, target)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=target)
    return dt


def _parse_natural(text: str, target: tzinfo) -> datetime:
    # Relative expressions are resolved against the wall-clock time in target
    base = datetime.now(target).replace(tzinfo=None)
    try:
        dt = dateparser.parse(text, settings={"RELATIVE_BASE": base})
    except (ValueError, TypeError, OverflowError) as e:
        raise DateParseError(f"Cannot parse date string: {text!r}") from e
    if dt is None:
        raise DateParseError(f"Cannot parse date string: {text!r}")
    return dt


def _from_timestamp(value: str) -> datetime:
    try:
        seconds = int(value) if value.lstrip("+-").isdigit() else float(value)
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        raise DateParseError(f"Invalid unix timestamp: {value!r}") from e


def create(when: DateLike = None, tz: Zone | None = None) -> datetime:
    """Like :func:`parse`, but falls back to the current time instead of raising.

    Callers cannot tell an explicit "now" from an unparseable value; use
    :func:`parse` when that distinction matters.
    """
    try:
        return parse(when, tz)
    except DateParseError as e:
        logger.debug("%s; falling back to the current time", e)
        return datetime.now(zone(tz))


def copy(dt: DateLike) -> datetime:
    """Return a new datetime object equal to ``create(dt)``."""
    return create(dt).replace()


def sunday(when: DateLike = None, tz: Zone | None = None) -> datetime:
    """Return midnight of the Sunday starting the week of ``when``.

    A value already on a Sunday stays on that Sunday.
    """
    dt = create(when, tz).replace(hour=0, minute=0, second=0, microsecond=0)
    # weekday(): Monday=0 ... Sunday=6
    return dt - timedelta(days=(dt.weekday() + 1) % 7)


def saturday(when: DateLike = None, tz: Zone | None = None) -> datetime:
    """Return midnight of the Saturday ending the week of ``when``."""
    return sunday(when, tz) + timedelta(days=6)


def cmp(left: DateLike, right: DateLike) -> int:
    """Three-way comparison of two date-like values by absolute instant."""
    # Same-tzinfo datetimes compare by wall clock and ignore fold
    a = create(left).timestamp()
    b = create(right).timestamp()
    return (a > b) - (a < b)


def snap(dt: DateLike, interval: int = SNAP_INTERVAL) -> datetime:
    """Advance ``dt`` to the next multiple of ``interval`` seconds since the epoch.

    A value exactly on a boundary moves to the following boundary.

    Raises:
        ValueError: If interval is not positive
    """
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval}")
    value = create(dt)
    t = math.floor(value.timestamp())
    return datetime.fromtimestamp(t - t % interval + interval, tz=value.tzinfo)
