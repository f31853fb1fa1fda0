from .config import default_tz
from .core import (
    DateLike,
    DateParseError,
    cmp,
    copy,
    create,
    parse,
    saturday,
    snap,
    sunday,
)
from .formatting import (
    TIME_WHEN_FORMATS,
    Format,
    is_date_like,
    rfc3339,
    time_ago,
    time_when,
    to_date_string,
)

__all__ = [
    "DateLike",
    "DateParseError",
    "Format",
    "create",
    "parse",
    "copy",
    "sunday",
    "saturday",
    "cmp",
    "snap",
    "to_date_string",
    "is_date_like",
    "time_ago",
    "time_when",
    "rfc3339",
    "TIME_WHEN_FORMATS",
    "default_tz",
]
