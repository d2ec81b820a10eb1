"""Calendar-date parsing for measurement dates.

Lab data arrives with heterogeneous date strings. Everything is reduced to a
``datetime.date`` (no time zone, no time of day) so measurements compare by
calendar day. Unparsable input yields ``None`` rather than raising.

Formats, first match wins:
    1. ``YYYY-MM-DD``  (three ``-`` segments, four-character year first)
    2. ``DD/MM/YYYY``  (three ``/`` segments, day first)
    3. ISO 8601 via ``datetime.fromisoformat`` (trailing ``Z`` accepted)

In rules 1 and 2 a year of 0-99 means 1900-1999.
"""

import logging
import re
from datetime import date, datetime

logger = logging.getLogger(__name__)

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

# Sorts after every real date; used for measurements with unparsable dates.
_INVALID_SORT_KEY = (1, date.max)


def _leading_int(segment: str) -> int | None:
    """Read the leading integer of a segment ("17T10:00" -> 17)."""
    match = _LEADING_INT_RE.match(segment)
    if match is None:
        return None
    return int(match.group(1))


def _build_date(year: int | None, month: int | None, day: int | None) -> date | None:
    if year is None or month is None or day is None:
        return None
    # years 0-99 are 1900-1999 ("17/03/25" -> 1925-03-17)
    if 0 <= year <= 99:
        year += 1900
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_date_value(date_string: str | None) -> date | None:
    """Parse a measurement date string into a calendar date.

    Args:
        date_string: Raw date text, e.g. "2025-03-17" or "17/03/2025".

    Returns:
        The calendar date, or None when the text cannot be read.
    """
    if not isinstance(date_string, str):
        return None

    parts_ymd = date_string.split("-")
    if len(parts_ymd) == 3 and len(parts_ymd[0]) == 4:
        return _build_date(
            _leading_int(parts_ymd[0]),
            _leading_int(parts_ymd[1]),
            _leading_int(parts_ymd[2]),
        )

    parts_dmy = date_string.split("/")
    if len(parts_dmy) == 3:
        return _build_date(
            _leading_int(parts_dmy[2]),
            _leading_int(parts_dmy[1]),
            _leading_int(parts_dmy[0]),
        )

    try:
        return datetime.fromisoformat(date_string.strip().replace("Z", "+00:00")).date()
    except ValueError:
        logger.debug("Unparsable measurement date: %r", date_string)
        return None


def date_sort_key(value: date | None) -> tuple[int, date]:
    """Sort key placing unparsable (None) dates after every valid date."""
    if value is None:
        return _INVALID_SORT_KEY
    return (0, value)
