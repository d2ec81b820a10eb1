"""Chart bundle schemas handed to the front-end chart renderer.

The annotation shapes mirror what a line-annotation plugin expects:
horizontal thresholds pin ``y_min == y_max``, vertical event markers pin
``x_min == x_max`` (ISO date).
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class AnnotationLabel(BaseModel):
    """Text label drawn on an annotation line."""

    content: str
    display: bool = True
    position: str = "end"
    background_color: str | None = None
    color: str = "white"
    rotation: int | None = None
    font: dict[str, Any] = Field(default_factory=dict)
    padding: int | dict[str, int] = 3
    border_radius: int = 3


class LineAnnotation(BaseModel):
    """A horizontal threshold line or a vertical event line."""

    type: Literal["line"] = "line"
    kind: Literal["threshold_min", "threshold_max", "event"]
    parameter: str | None = Field(default=None, description="Owning parameter for thresholds")
    event_id: str | None = Field(default=None, description="ClinicalEvent id for event lines")
    y_min: float | None = None
    y_max: float | None = None
    x_min: str | None = None
    x_max: str | None = None
    border_color: str
    border_width: int = 2
    border_dash: list[int] = Field(default_factory=lambda: [6, 6])
    label: AnnotationLabel | None = None


class EventLegendEntry(BaseModel):
    """Side-legend entry for events without an on-chart label."""

    date: str = Field(..., description="ISO date of the event")
    label: str = Field(..., description="Localized short date, e.g. '17 mar'")
    description: str
    color: str


class ChartAnnotationSet(BaseModel):
    """All overlay directives for one chart."""

    lines: list[LineAnnotation] = Field(default_factory=list)
    legend: list[EventLegendEntry] = Field(default_factory=list)
    begin_at_zero: bool = False


class ChartPoint(BaseModel):
    """One plotted point with its pre-rendered tooltip text."""

    x: str | None = Field(..., description="ISO date, None when the source date is unparsable")
    y: float
    tooltip_title: str
    tooltip_label: str


class ChartDataset(BaseModel):
    """Plotted series for one parameter."""

    parameter: str
    label: str
    unit: str
    color: str
    points: list[ChartPoint] = Field(default_factory=list)


class ChartAxes(BaseModel):
    """Axis titles and date-tick formatting."""

    x_title: str
    y_title: str
    time_unit: str = "day"
    tooltip_format: str = "dd/MM/yyyy"
    tick_format: str = "dd/MM/yy"
    locale: str = "es-ES"


class ChartBundle(BaseModel):
    """Everything the chart renderer needs for a single chart."""

    type: Literal["evolution_chart"] = "evolution_chart"
    title: str
    mode: Literal["single", "overlay"]
    datasets: list[ChartDataset] = Field(default_factory=list)
    axes: ChartAxes
    annotations: ChartAnnotationSet
