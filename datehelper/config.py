"""Time zone configuration.

The default zone is read from the ``DATEHELPER_TZ`` environment variable
each time it is needed, so it can be changed at runtime.
"""

import logging
import os
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

TZ_ENV_VAR = "DATEHELPER_TZ"
FALLBACK_TZ = "UTC"

Zone = str | tzinfo


def zone(tz: Zone | None = None) -> tzinfo:
    """Resolve a zone name or tzinfo, falling back to the default zone.

    Raises:
        ValueError: If ``tz`` names an unknown IANA zone
    """
    if tz is None:
        return default_tz()
    if isinstance(tz, tzinfo):
        return tz
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(
            f"Unknown time zone: {tz!r}\n"
            f"Hint: use an IANA name such as 'UTC', 'US/Pacific' or 'Europe/London'"
        ) from e


def default_tz() -> tzinfo:
    """Return the zone named by DATEHELPER_TZ, or UTC."""
    name = os.environ.get(TZ_ENV_VAR) or FALLBACK_TZ
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.debug("Invalid %s=%r, using %s", TZ_ENV_VAR, name, FALLBACK_TZ)
        return ZoneInfo(FALLBACK_TZ)
