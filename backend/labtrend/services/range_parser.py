"""Reference-range string parsing.

Labs print reference ranges as free text. This module turns the common
shapes into a ``ParsedRange`` with numeric ``min`` / ``max`` bounds:

    "[3.5-5.5]", "[ 3,5 - 5,5 ]"      -> min and max
    "3.5-5.5"                          -> min and max (whole string)
    "< 10", "<=10"                     -> max only
    "> 2", ">=2"                       -> min only
    "Insuf: 10-30 Suf: 30-100"         -> sufficiency band (vitamin D style)

Anything else keeps its raw text for display with both bounds empty.
Parsing never raises.
"""

import logging
import re
from decimal import Decimal

from labtrend.schemas.measurement import ParsedRange

logger = logging.getLogger(__name__)

NOT_AVAILABLE_TEXT = "N/A"

# ASCII digits only
_NUMBER = r"([0-9.]+)"

_BRACKETED_RE = re.compile(rf"\[\s*{_NUMBER}\s*-\s*{_NUMBER}\s*\]")
# whole string; \Z also rejects a trailing newline
_BARE_INTERVAL_RE = re.compile(rf"^{_NUMBER}\s*-\s*{_NUMBER}\Z")
_UPPER_BOUND_RE = re.compile(rf"<\s*=?\s*{_NUMBER}")
_LOWER_BOUND_RE = re.compile(rf">\s*=?\s*{_NUMBER}")
_SUFFICIENCY_RE = re.compile(rf"(?:Suficiencia|Suf)\s*:\s*{_NUMBER}(?:\s*-\s*{_NUMBER})?")

# (pattern, which bounds the captures fill)
_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (_BRACKETED_RE, "both"),
    (_BARE_INTERVAL_RE, "both"),
    (_UPPER_BOUND_RE, "max"),
    (_LOWER_BOUND_RE, "min"),
    (_SUFFICIENCY_RE, "sufficiency"),
]


def _bounds_from_match(match: re.Match[str], kind: str) -> tuple[float | None, float | None]:
    """Convert regex captures to bounds. Raises ValueError on malformed numbers."""
    if kind == "both":
        return float(match.group(1)), float(match.group(2))
    if kind == "max":
        return None, float(match.group(1))
    if kind == "min":
        return float(match.group(1)), None
    # sufficiency: upper bound is optional
    upper = match.group(2)
    return float(match.group(1)), float(upper) if upper is not None else None


def parse_ref_range(ref_range: str | None) -> ParsedRange:
    """Parse a reference-range string into numeric bounds.

    Args:
        ref_range: Raw reference-range text, or None.

    Returns:
        ParsedRange. Absent input gives text "N/A"; unparsable input keeps
        the raw string as text with both bounds None.
    """
    if not ref_range or not isinstance(ref_range, str):
        return ParsedRange(min=None, max=None, text=NOT_AVAILABLE_TEXT)

    cleaned = ref_range.replace(",", ".")

    for pattern, kind in _PATTERNS:
        match = pattern.search(cleaned)
        if match is None:
            continue
        try:
            low, high = _bounds_from_match(match, kind)
        except ValueError:
            logger.debug("Malformed number in reference range %r", ref_range)
            break
        return ParsedRange(min=low, max=high, text=ref_range)

    return ParsedRange(min=None, max=None, text=ref_range)


def format_number(value: float) -> str:
    """Render a bound without a trailing ``.0`` (10.0 -> "10", 3.5 -> "3.5")."""
    if float(value).is_integer():
        return str(int(value))
    # positional notation so the text stays inside the [0-9.]+ number grammar
    return format(Decimal(repr(float(value))), "f")


def format_ref_range(parsed: ParsedRange) -> str:
    """Build a canonical reference-range string from parsed bounds.

    The result parses back to the same bounds. Returns the stored text when
    neither bound is set.
    """
    if parsed.min is not None and parsed.max is not None:
        return f"[{format_number(parsed.min)}-{format_number(parsed.max)}]"
    if parsed.max is not None:
        return f"< {format_number(parsed.max)}"
    if parsed.min is not None:
        return f"> {format_number(parsed.min)}"
    return parsed.text
