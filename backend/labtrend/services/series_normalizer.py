"""Chronological ordering of a parameter series for charting."""

from collections.abc import Sequence

from labtrend.schemas.measurement import Measurement
from labtrend.services.date_parser import date_sort_key, parse_date_value


def normalize_series(series: Sequence[Measurement]) -> list[Measurement]:
    """Return a new list sorted ascending by parsed date.

    The sort is stable, so equal dates keep their source order. Unparsable
    dates sort last. The input sequence is left untouched.
    """
    return sorted(series, key=lambda m: date_sort_key(parse_date_value(m.date)))
