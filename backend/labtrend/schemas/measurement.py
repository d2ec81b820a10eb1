"""Measurement, reference range and status flag schemas.

Field names on the wire follow the JSON data set (`refRange`,
`outOfRange`); Python attributes are snake_case.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Trend = Literal["low", "high", "normal"]


class Measurement(BaseModel):
    """A single dated blood-test result for one parameter.

    Immutable once ingested; new results are appended, never edited.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str = Field(..., description="Date string (YYYY-MM-DD or DD/MM/YYYY)")
    value: float = Field(..., description="Measured value")
    unit: str = Field(default="", description="Unit of measure")
    ref_range: str | None = Field(
        default=None,
        alias="refRange",
        description="Lab-provided reference range as free text",
    )
    note: str | None = Field(default=None, description="Optional free-text note")


class ParsedRange(BaseModel):
    """Numeric interval parsed from a reference-range string.

    Both bounds are None when the source text was unparsable (``text`` keeps
    the raw string) or absent (``text`` is ``"N/A"``).
    """

    model_config = ConfigDict(frozen=True)

    min: float | None = None
    max: float | None = None
    text: str = "N/A"

    @property
    def is_empty(self) -> bool:
        return self.min is None and self.max is None


class StatusFlag(BaseModel):
    """Out-of-range flag for the latest measurement of a parameter."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    out_of_range: bool = Field(default=False, alias="outOfRange")
    trend: Trend = "normal"


class ParameterSummary(BaseModel):
    """Selector entry: parameter name plus its latest-value flag."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    label: str = Field(..., description="Name with the out-of-range marker appended")
    flag: StatusFlag
    count: int = Field(default=0, description="Number of stored measurements")


class ParameterSeriesResponse(BaseModel):
    """Chronologically ordered series for one parameter."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    measurements: list[Measurement] = Field(default_factory=list)
    flag: StatusFlag
    reference: ParsedRange = Field(
        default_factory=ParsedRange,
        description="Range of the chronologically first measurement",
    )


class ParameterDescription(BaseModel):
    """Explanatory text for one parameter."""

    parameter: str
    description: str
