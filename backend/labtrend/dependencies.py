"""FastAPI dependencies for the shared store and services.

The store and description service are process-wide singletons created on
first use from settings. Tests replace them through
``app.dependency_overrides``.
"""

from functools import lru_cache

from labtrend.config import settings
from labtrend.repositories.measurements import MeasurementStore, load_general_ref_ranges
from labtrend.services.descriptions import DescriptionService


@lru_cache(maxsize=1)
def get_store() -> MeasurementStore:
    """Measurement store loaded from settings.data_file."""
    return MeasurementStore.from_file(settings.data_file)


@lru_cache(maxsize=1)
def get_general_ref_ranges() -> dict[str, str]:
    """Optional per-parameter range text used in chart titles."""
    return load_general_ref_ranges(settings.general_ref_ranges_file)


@lru_cache(maxsize=1)
def get_description_service() -> DescriptionService:
    return DescriptionService()
