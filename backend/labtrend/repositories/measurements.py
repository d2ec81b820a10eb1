"""In-memory measurement store loaded from a JSON document.

The document shape is ``{parameterName: [Measurement, ...]}``. The store
hands out copies of its sequences and only ever appends; nothing is
written back to disk.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from labtrend.schemas.measurement import Measurement

logger = logging.getLogger(__name__)

_DATA_ADAPTER = TypeAdapter(dict[str, list[Measurement]])
_RANGES_ADAPTER = TypeAdapter(dict[str, str])


class MeasurementStore:
    """Parameter name -> ordered measurements, in insertion order.

    Example:
        store = MeasurementStore.from_file(Path("fixtures/blood_test_data.json"))
        store.append("Hemoglobina", Measurement(date="2025-06-01", value=13.1, unit="g/dL"))
    """

    def __init__(self, data: Mapping[str, list[Measurement]] | None = None):
        self._data: dict[str, list[Measurement]] = {
            name: list(series) for name, series in (data or {}).items()
        }

    @classmethod
    def from_payload(cls, payload: Any) -> "MeasurementStore":
        """Build a store from a decoded JSON payload.

        Raises:
            pydantic.ValidationError: If the payload does not match the
                ``{name: [Measurement]}`` shape.
        """
        return cls(_DATA_ADAPTER.validate_python(payload))

    @classmethod
    def from_file(cls, path: Path) -> "MeasurementStore":
        """Load a store from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist.
            json.JSONDecodeError: If the file is not valid JSON.
            pydantic.ValidationError: If the content has the wrong shape.
        """
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
        store = cls.from_payload(payload)
        logger.info(
            "Loaded %d parameters (%d measurements) from %s",
            len(store._data),
            sum(len(s) for s in store._data.values()),
            path,
        )
        return store

    def __contains__(self, name: object) -> bool:
        return name in self._data

    def __len__(self) -> int:
        return len(self._data)

    def parameter_names(self) -> list[str]:
        """Sorted names of parameters with at least one measurement."""
        return sorted(name for name, series in self._data.items() if series)

    def series(self, name: str) -> list[Measurement]:
        """Copy of a parameter's measurements in insertion order.

        Raises:
            KeyError: If the parameter is unknown.
        """
        return list(self._data[name])

    def all(self) -> dict[str, list[Measurement]]:
        """Copy of the whole data set."""
        return {name: list(series) for name, series in self._data.items()}

    def append(self, name: str, measurement: Measurement) -> None:
        """Append a measurement, creating the parameter if needed."""
        self._data.setdefault(name, []).append(measurement)
        logger.info("Appended measurement for %s dated %s", name, measurement.date)


def load_general_ref_ranges(path: Path | None) -> dict[str, str]:
    """Load the optional ``{parameterName: rangeText}`` title overrides.

    Returns an empty mapping when no path is configured.
    """
    if path is None:
        return {}
    with open(path, encoding="utf-8") as f:
        return _RANGES_ADAPTER.validate_python(json.load(f))
