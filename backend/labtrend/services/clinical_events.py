"""Fixed clinical events overlaid on every evolution chart.

The table is a process-wide constant; it is not user-editable and not stored
per patient.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any


@dataclass(frozen=True)
class ClinicalEvent:
    """A calendar-dated marker drawn as a vertical line on the chart.

    Attributes:
        date: Calendar date of the event.
        id: Stable identifier.
        description: Human-readable description (Spanish).
        line_color: RGBA colour of the vertical line.
        display_on_chart: Whether the line carries an on-chart text label.
            Events without one are listed in the side legend instead.
        label_style: Label options for on-chart labels.
        legend_color: Text colour used for the side-legend entry.
    """

    date: date
    id: str
    description: str
    line_color: str
    display_on_chart: bool = False
    label_style: dict[str, Any] | None = field(default=None, hash=False, compare=False)
    legend_color: str | None = None


CLINICAL_EVENTS: tuple[ClinicalEvent, ...] = (
    ClinicalEvent(
        date=date(2025, 3, 17),
        id="pembro1",
        description="1ª dosis Pembrolizumab",
        line_color="rgba(255, 165, 0, 0.8)",
        legend_color="#f97316",
    ),
    ClinicalEvent(
        date=date(2025, 4, 7),
        id="pembro2",
        description="2ª dosis Pembrolizumab",
        line_color="rgba(255, 204, 0, 0.8)",
        legend_color="#facc15",
    ),
    ClinicalEvent(
        date=date(2025, 5, 5),
        id="ensayoEnd",
        description="Fin del Ensayo",
        line_color="rgba(100, 181, 246, 0.7)",
        display_on_chart=True,
        label_style={
            "content": "Fin del Ensayo",
            "display": True,
            "position": "center",
            "rotation": -90,
            "background_color": "rgba(100, 181, 246, 0.5)",
            "font": {"size": 10, "weight": "bold"},
            "color": "white",
            "padding": {"top": 6, "bottom": 6, "left": 4, "right": 4},
            "border_radius": 3,
        },
    ),
)
