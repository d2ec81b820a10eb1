"""Out-of-range classification of a parameter's latest measurement.

The parameter selector marks each parameter whose most recent result falls
outside that result's own reference range. Boundary semantics are
exclusive: ``value < min`` is low, ``value > max`` is high.
"""

from collections.abc import Mapping, Sequence

from labtrend.schemas.measurement import Measurement, StatusFlag
from labtrend.services.date_parser import parse_date_value
from labtrend.services.range_parser import parse_ref_range

NORMAL_FLAG = StatusFlag(out_of_range=False, trend="normal")

_TREND_MARKERS = {
    "low": " ⬇️",
    "high": " ⬆️",
}


def select_latest(series: Sequence[Measurement]) -> Measurement | None:
    """Pick the chronologically latest measurement.

    Measurements with unparsable dates never beat one with a valid date. On
    equal dates the earliest in source order wins. If no date parses, the
    first measurement in source order is returned.

    Returns:
        The latest measurement, or None for an empty series.
    """
    latest: Measurement | None = None
    latest_date = None
    for measurement in series:
        parsed = parse_date_value(measurement.date)
        if parsed is None:
            continue
        if latest_date is None or parsed > latest_date:
            latest, latest_date = measurement, parsed

    if latest is None and series:
        return series[0]
    return latest


def classify_measurement(measurement: Measurement) -> StatusFlag:
    """Classify one measurement against its own reference range."""
    if not measurement.ref_range:
        return NORMAL_FLAG

    ref = parse_ref_range(measurement.ref_range)
    if ref.min is not None and measurement.value < ref.min:
        return StatusFlag(out_of_range=True, trend="low")
    if ref.max is not None and measurement.value > ref.max:
        return StatusFlag(out_of_range=True, trend="high")
    return NORMAL_FLAG


def classify_series(series: Sequence[Measurement]) -> StatusFlag:
    """Flag a parameter from its latest measurement.

    Args:
        series: Measurements for one parameter, in any order.

    Returns:
        StatusFlag of the latest measurement; normal for an empty series.
    """
    latest = select_latest(series)
    if latest is None:
        return NORMAL_FLAG
    return classify_measurement(latest)


def classify_parameters(
    data: Mapping[str, Sequence[Measurement]],
) -> dict[str, StatusFlag]:
    """Flag every parameter that has at least one measurement.

    Returns:
        Mapping of parameter name to flag, keyed in sorted name order.
    """
    return {
        name: classify_series(data[name])
        for name in sorted(data)
        if data[name]
    }


def flag_marker(flag: StatusFlag) -> str:
    """Suffix appended to a parameter name in the selector (arrow or empty)."""
    if not flag.out_of_range:
        return ""
    return _TREND_MARKERS.get(flag.trend, "")
