"""Pydantic schemas."""

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
from labtrend.schemas.measurement import (
    Measurement,
    ParameterDescription,
    ParameterSeriesResponse,
    ParameterSummary,
    ParsedRange,
    StatusFlag,
    Trend,
)

__all__ = [
    "AnnotationLabel",
    "ChartAnnotationSet",
    "ChartAxes",
    "ChartBundle",
    "ChartDataset",
    "ChartPoint",
    "EventLegendEntry",
    "LineAnnotation",
    "Measurement",
    "ParameterDescription",
    "ParameterSeriesResponse",
    "ParameterSummary",
    "ParsedRange",
    "StatusFlag",
    "Trend",
]
