"""Deterministic chart builder for blood-test evolution charts.

Turns one or more parameter series into a ``ChartBundle``: chronologically
ordered datasets, horizontal reference-threshold lines, vertical clinical
event lines with a side legend, and the value-axis zero hint.

The threshold lines use the *first* measurement's reference range for each
parameter. Labs may revise a range over time; the chart keeps the earliest
recorded one.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from labtrend.schemas.chart import (
    AnnotationLabel,
    ChartAnnotationSet,
    ChartAxes,
    ChartBundle,
    ChartDataset,
    ChartPoint,
    EventLegendEntry,
    LineAnnotation,
)
from labtrend.schemas.measurement import Measurement, ParsedRange
from labtrend.services.clinical_events import CLINICAL_EVENTS, ClinicalEvent
from labtrend.services.date_parser import parse_date_value
from labtrend.services.range_parser import format_number, parse_ref_range
from labtrend.services.series_normalizer import normalize_series

logger = logging.getLogger(__name__)

# Overlay colours, reused cyclically by parameter position
PALETTE: tuple[str, ...] = (
    "#4f46e5",  # indigo
    "#db2777",  # pink
    "#059669",  # emerald
    "#d97706",  # amber
    "#0891b2",  # cyan
    "#7c3aed",  # violet
    "#dc2626",  # red
)

MIN_LINE_COLOR = "rgba(255, 99, 132, 0.7)"
MAX_LINE_COLOR = "rgba(75, 192, 192, 0.7)"

# Axis starts at zero only for non-negative data whose minimum is below this
BEGIN_AT_ZERO_THRESHOLD = 20

X_AXIS_TITLE = "Fecha del Análisis"

_SHORT_MONTHS_ES = (
    "ene", "feb", "mar", "abr", "may", "jun",
    "jul", "ago", "sept", "oct", "nov", "dic",
)


# =============================================================================
# Formatting helpers
# =============================================================================


def format_day_month_year(value: date) -> str:
    """Format a date as es-ES ``dd/mm/yyyy``."""
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def format_day_short_month(value: date) -> str:
    """Format a date as es-ES ``dd mmm`` (e.g. "17 mar")."""
    return f"{value.day:02d} {_SHORT_MONTHS_ES[value.month - 1]}"


def format_tooltip_title(measurement: Measurement) -> str:
    """Tooltip title: the point's calendar date, or the raw text if unparsable."""
    parsed = parse_date_value(measurement.date)
    if parsed is None:
        return measurement.date
    return format_day_month_year(parsed)


def format_tooltip_label(parameter: str, measurement: Measurement, unit: str) -> str:
    """Tooltip body: ``<param>: <value> <unit> (Ref: <range>) (<note>)``.

    The reference and note segments are omitted when absent.
    """
    label = f"{parameter}: " + f"{format_number(measurement.value)} {unit}".rstrip()
    if measurement.ref_range:
        label += f" (Ref: {measurement.ref_range})"
    if measurement.note:
        label += f" ({measurement.note})"
    return label


# =============================================================================
# Annotation builders
# =============================================================================


def representative_range(series: Sequence[Measurement]) -> ParsedRange:
    """Reference range of the chronologically first measurement."""
    ordered = normalize_series(series)
    if not ordered:
        return ParsedRange()
    return parse_ref_range(ordered[0].ref_range)


def build_threshold_lines(
    parameter: str,
    ref: ParsedRange,
    *,
    color: str | None = None,
    prefix_parameter: bool = False,
) -> list[LineAnnotation]:
    """Build 0-2 horizontal lines for the min / max bounds of a range.

    Args:
        parameter: Parameter the lines belong to.
        ref: Parsed representative range.
        color: Line colour override (overlay mode uses the parameter colour).
        prefix_parameter: Prefix labels with the parameter name.
    """
    lines: list[LineAnnotation] = []
    prefix = f"{parameter} " if prefix_parameter else ""

    for kind, bound, name, default_color in (
        ("threshold_min", ref.min, "Min", MIN_LINE_COLOR),
        ("threshold_max", ref.max, "Max", MAX_LINE_COLOR),
    ):
        if bound is None:
            continue
        line_color = color or default_color
        lines.append(LineAnnotation(
            kind=kind,
            parameter=parameter,
            y_min=bound,
            y_max=bound,
            border_color=line_color,
            label=AnnotationLabel(
                content=f"{prefix}Ref {name}: {format_number(bound)}",
                position="end",
                background_color=line_color,
                font={"style": "normal", "size": 10, "weight": "normal"},
            ),
        ))
    return lines


def build_event_annotations(
    events: Iterable[ClinicalEvent] = CLINICAL_EVENTS,
) -> list[LineAnnotation]:
    """One vertical line per event; only on-chart events carry a label."""
    lines: list[LineAnnotation] = []
    for event in events:
        label = None
        if event.display_on_chart and event.label_style:
            label = AnnotationLabel(**event.label_style)
        iso = event.date.isoformat()
        lines.append(LineAnnotation(
            kind="event",
            event_id=event.id,
            x_min=iso,
            x_max=iso,
            border_color=event.line_color,
            label=label,
        ))
    return lines


def build_event_legend(
    events: Iterable[ClinicalEvent] = CLINICAL_EVENTS,
) -> list[EventLegendEntry]:
    """Side-legend entries for events that have no on-chart label."""
    return [
        EventLegendEntry(
            date=event.date.isoformat(),
            label=format_day_short_month(event.date),
            description=event.description,
            color=event.legend_color,
        )
        for event in events
        if not event.display_on_chart and event.description and event.legend_color
    ]


def compute_begin_at_zero(values: Iterable[float]) -> bool:
    """Whether the value axis should start at zero.

    True only when every value is non-negative and the smallest value is
    below BEGIN_AT_ZERO_THRESHOLD. An empty input gives False.
    """
    values = list(values)
    if not values:
        return False
    if any(v < 0 for v in values):
        return False
    return min(values) < BEGIN_AT_ZERO_THRESHOLD


def palette_color(index: int) -> str:
    return PALETTE[index % len(PALETTE)]


def build_annotation_set(
    data_sets: Mapping[str, Sequence[Measurement]],
    events: Sequence[ClinicalEvent] = CLINICAL_EVENTS,
) -> ChartAnnotationSet:
    """Assemble threshold lines, event lines, legend and the zero hint.

    Args:
        data_sets: Parameter name -> measurements (any order). One entry is
            single mode; more than one is overlay mode.
        events: Clinical events to mark.
    """
    overlay = len(data_sets) > 1
    lines: list[LineAnnotation] = []
    all_values: list[float] = []

    for index, (parameter, series) in enumerate(data_sets.items()):
        ref = representative_range(series)
        lines.extend(build_threshold_lines(
            parameter,
            ref,
            color=palette_color(index) if overlay else None,
            prefix_parameter=overlay,
        ))
        all_values.extend(m.value for m in series)

    lines.extend(build_event_annotations(events))

    return ChartAnnotationSet(
        lines=lines,
        legend=build_event_legend(events),
        begin_at_zero=compute_begin_at_zero(all_values),
    )


# =============================================================================
# Chart bundle
# =============================================================================


def _build_dataset(parameter: str, series: Sequence[Measurement], color: str) -> ChartDataset:
    ordered = normalize_series(series)
    unit = ordered[0].unit if ordered else ""
    points = []
    for measurement in ordered:
        parsed = parse_date_value(measurement.date)
        points.append(ChartPoint(
            x=parsed.isoformat() if parsed is not None else None,
            y=measurement.value,
            tooltip_title=format_tooltip_title(measurement),
            tooltip_label=format_tooltip_label(parameter, measurement, unit),
        ))
    return ChartDataset(
        parameter=parameter,
        label=f"{parameter} ({unit})",
        unit=unit,
        color=color,
        points=points,
    )


def build_chart(
    data_sets: Mapping[str, Sequence[Measurement]],
    general_ref_ranges: Mapping[str, str] | None = None,
    events: Sequence[ClinicalEvent] = CLINICAL_EVENTS,
) -> ChartBundle:
    """Build the full evolution chart for one or more parameters.

    Args:
        data_sets: Parameter name -> measurements, in display order.
        general_ref_ranges: Optional per-parameter range text shown in the
            single-parameter title instead of the first measurement's range.
        events: Clinical events to mark.

    Returns:
        ChartBundle for the chart renderer.

    Raises:
        ValueError: If data_sets is empty.
    """
    if not data_sets:
        raise ValueError("data_sets cannot be empty")

    general_ref_ranges = general_ref_ranges or {}
    datasets = [
        _build_dataset(parameter, series, palette_color(index))
        for index, (parameter, series) in enumerate(data_sets.items())
    ]

    if len(datasets) == 1:
        parameter = datasets[0].parameter
        ref_text = general_ref_ranges.get(parameter) or (
            f"Ref: {representative_range(data_sets[parameter]).text}"
        )
        title = f"{parameter} - Evolución ({ref_text})"
        y_title = f"Valor ({datasets[0].unit})"
        mode = "single"
    else:
        title = ", ".join(d.parameter for d in datasets) + " - Evolución"
        y_title = "Valor"
        mode = "overlay"

    logger.debug("Built %s chart for %d parameter(s)", mode, len(datasets))

    return ChartBundle(
        title=title,
        mode=mode,
        datasets=datasets,
        axes=ChartAxes(x_title=X_AXIS_TITLE, y_title=y_title),
        annotations=build_annotation_set(data_sets, events),
    )
