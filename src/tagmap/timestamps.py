"""
Heuristic date/time parsing for mapped fields.

Tries a fixed, ordered list of textual layouts against a raw string and
returns the first match, interpreted as civil time in the supplied zone.

Supported layouts, in precedence order:
- ``MM/DD/YYYY HH:MM:SS``
- ``MM/DD/YYYY``
- ``YYYY-MM-DD HH:MM:SS``
- ``YYYY-MM-DD``
- ``YYYY-MM``
"""

import os
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .constants import TIMEZONE_ENV_VAR
from .errors import TimestampParseError

# Zero timestamp assigned to non-optional datetime fields on parse failure
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_ZERO_NAIVE = datetime(1, 1, 1)

# Shape checked with a whole-string match, then parsed with the strptime format
_LAYOUTS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\d{2}/\d{2}/\d{4} \d{2}:\d{2}:\d{2}", re.ASCII), "%m/%d/%Y %H:%M:%S"),
    (re.compile(r"\d{2}/\d{2}/\d{4}", re.ASCII), "%m/%d/%Y"),
    (re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", re.ASCII), "%Y-%m-%d %H:%M:%S"),
    (re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII), "%Y-%m-%d"),
    (re.compile(r"\d{4}-\d{2}", re.ASCII), "%Y-%m"),
)


def parse_timestamp(raw: str, zone: tzinfo) -> datetime:
    """
    Parse ``raw`` using the first layout whose shape matches it.

    Only the first matching shape is attempted: ``"99/99/9999"`` has the
    ``MM/DD/YYYY`` shape, so it fails as an invalid date rather than falling
    through to later layouts.

    Args:
        raw: Text to parse
        zone: Time zone the civil time is interpreted in

    Returns:
        Timezone-aware datetime

    Raises:
        TimestampParseError: If no layout matches or the date is invalid
    """
    for pattern, layout in _LAYOUTS:
        if pattern.fullmatch(raw):
            try:
                parsed = datetime.strptime(raw, layout)
            except ValueError as e:
                raise TimestampParseError(raw, str(e)) from e
            return parsed.replace(tzinfo=zone)

    raise TimestampParseError(raw)


def is_zero(value: Optional[datetime]) -> bool:
    """Check whether ``value`` is the zero instant (or missing)."""
    if value is None:
        return True
    if value.tzinfo is None:
        return value == _ZERO_NAIVE
    offset = value.utcoffset() or timedelta(0)
    # A negative offset would put the zero instant before year 1
    if offset < timedelta(0):
        return False
    return value.replace(tzinfo=None) == _ZERO_NAIVE + offset


def resolve_zone(zone: Union[tzinfo, str, None] = None) -> tzinfo:
    """
    Resolve the time zone used for parsing.

    Search order:
    1. Explicitly passed tzinfo or IANA zone name
    2. Environment variable TAGMAP_TIMEZONE
    3. UTC

    Raises:
        ValueError: If a zone name is unknown
    """
    if isinstance(zone, tzinfo):
        return zone

    name = zone or os.environ.get(TIMEZONE_ENV_VAR)
    if not name:
        return timezone.utc
    if name.upper() == "UTC":
        return timezone.utc

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"unknown time zone {name!r}") from e


def format_iso(value: datetime) -> str:
    """Format a datetime as ISO 8601, using a Z suffix for UTC."""
    text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text
