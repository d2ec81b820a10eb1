"""Data access layer."""

from labtrend.repositories.measurements import MeasurementStore, load_general_ref_ranges

__all__ = ["MeasurementStore", "load_general_ref_ranges"]
