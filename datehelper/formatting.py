"""Human-readable renderings of date-like values."""

import re
from collections.abc import Callable, Mapping
from datetime import date, datetime, timedelta
from typing import Literal, TypeAlias

from dateutil.relativedelta import relativedelta

from datehelper.config import Zone
from datehelper.core import DateLike, create
from datehelper.util import TIME_AGO_PARTS

Format: TypeAlias = str | Callable[[datetime], str]
Period: TypeAlias = Literal["today", "year", "other"]

_DATE_LIKE = re.compile(r"\d{4}-\d{2}-\d{2}(T?\d{2}:\d{2}:\d{2})?", re.ASCII)


def rfc3339(dt: datetime) -> str:
    """Format as ``2025-01-06T09:30:00+00:00``."""
    return dt.isoformat(timespec="seconds")


def clock(dt: datetime) -> str:
    """Format as ``9:30 am``: 12-hour clock, unpadded hour, lowercase meridiem."""
    meridiem = "am" if dt.hour < 12 else "pm"
    return f"{dt.hour % 12 or 12}:{dt:%M} {meridiem}"


def month_day(dt: datetime) -> str:
    """Format as ``Jan 6``."""
    return f"{dt:%b} {dt.day}"


TIME_WHEN_FORMATS: dict[Period, Format] = {
    "today": clock,
    "year": month_day,
    "other": "%m/%d/%Y",
}


def render(dt: datetime, format: Format) -> str:
    """Render with a strftime pattern or a formatting callable."""
    if callable(format):
        return format(dt)
    return dt.strftime(format)


def to_date_string(
    when: DateLike = None, tz: Zone | None = None, format: Format = rfc3339
) -> str | None:
    """Render a date-like value, or return None for a falsy one."""
    if not when:
        return None
    return render(create(when, tz), format)


def is_date_like(when: DateLike) -> bool:
    """Cheap check for values that look like dates.

    Date and datetime objects always qualify. Anything else qualifies when
    its string form starts with ``YYYY-MM-DD``, optionally followed by a
    ``HH:MM:SS`` time; trailing text is not inspected.
    """
    if not when:
        return False
    if isinstance(when, date):
        return True
    return _DATE_LIKE.match(str(when)) is not None


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" + ("s" if count != 1 else "")


def _duration(
    interval: "DateLike | relativedelta | timedelta", now: DateLike
) -> relativedelta:
    if isinstance(interval, relativedelta):
        fields = (
            interval.years,
            interval.months,
            interval.days,
            interval.hours,
            interval.minutes,
            interval.seconds,
        )
        if any(f < 0 for f in fields) and any(f > 0 for f in fields):
            # Mixed signs: let the calendar carry, e.g. -3 days +4 hours
            anchor = create(now)
            interval = relativedelta(anchor + interval, anchor)
        return abs(interval)
    if isinstance(interval, timedelta):
        interval = abs(interval)
        return relativedelta(days=interval.days, seconds=interval.seconds)
    then = create(interval)
    reference = create(now).astimezone(then.tzinfo)
    return abs(relativedelta(reference, then))


def time_ago(
    interval: "DateLike | relativedelta | timedelta",
    parts: int = TIME_AGO_PARTS,
    *,
    now: DateLike = None,
) -> str:
    """
    Describe a duration in words, e.g. ``"1 year, 2 months, 1 week"``.

    Args:
        interval: A relativedelta or timedelta, or a date-like value that is
            measured against ``now``
        parts: Maximum number of components to include, most significant first
        now: Reference time for date-like intervals (default: current time)

    Returns:
        Comma separated components. Days above six are split into weeks
        and days. Seconds are only included when there are no years,
        months or days. A zero duration yields an empty string.

    Example:
        >>> time_ago(relativedelta(days=10, hours=4))
        '1 week, 3 days, 4 hours'
    """
    delta = _duration(interval, now)

    components: list[str] = []
    if delta.years:
        components.append(_plural(delta.years, "year"))
    if delta.months:
        components.append(_plural(delta.months, "month"))
    if delta.days > 6:
        weeks, days = divmod(delta.days, 7)
        components.append(_plural(weeks, "week"))
        if days:
            components.append(_plural(days, "day"))
    elif delta.days:
        components.append(_plural(delta.days, "day"))
    if delta.hours:
        components.append(_plural(delta.hours, "hour"))
    if delta.minutes:
        components.append(_plural(delta.minutes, "minute"))
    if delta.seconds and not (delta.years or delta.months or delta.days):
        components.append(_plural(delta.seconds, "second"))

    return ", ".join(components[:parts])


def time_when(
    time: DateLike,
    now: DateLike = None,
    format: Mapping[str, Format] | None = None,
) -> str:
    """
    Short rendering of ``time`` that depends on how far it is from ``now``.

    Args:
        time: The value to render
        now: Reference time (default: current time)
        format: Overrides for any of the "today", "year" and "other"
            formats; see TIME_WHEN_FORMATS for the defaults

    Returns:
        ``time`` rendered with the "today" format when it falls on the same
        calendar day as ``now``, the "year" format when it falls in the same
        year, and the "other" format otherwise. Each value is
        compared by its own wall-clock date.

    Example:
        >>> time_when("2025-01-06 15:00", now="2025-01-06 09:00")
        '3:00 pm'
        >>> time_when("2025-03-01 15:00", now="2025-01-06 09:00")
        'Mar 1'
        >>> time_when("2024-03-01 15:00", now="2025-01-06 09:00")
        '03/01/2024'
    """
    when = create(time)
    reference = create(now)
    formats: dict[str, Format] = {**TIME_WHEN_FORMATS, **(format or {})}

    if when.date() == reference.date():
        period: Period = "today"
    elif when.year == reference.year:
        period = "year"
    else:
        period = "other"
    return render(when, formats[period])
