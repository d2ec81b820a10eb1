"""Pytest configuration and shared fixtures.

This module provides centralized test fixtures for:
- HTTP client for API testing (store and services overridden)
- The bundled blood-test fixture data
- Measurement factories
"""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from labtrend.dependencies import (
    get_description_service,
    get_general_ref_ranges,
    get_store,
)
from labtrend.main import app
from labtrend.repositories.measurements import MeasurementStore
from labtrend.schemas.measurement import Measurement
from labtrend.services.descriptions import DescriptionService

FIXTURES_DIR = Path(__file__).parent.parent.parent / "fixtures"
DATA_FILE = FIXTURES_DIR / "blood_test_data.json"


def make_measurement(
    date: str,
    value: float,
    ref_range: str | None = None,
    *,
    unit: str = "g/dL",
    note: str | None = None,
) -> Measurement:
    """Create a Measurement for testing."""
    return Measurement(date=date, value=value, unit=unit, ref_range=ref_range, note=note)


def create_mock_openai_client(output_text: str | None = "Descripción generada.") -> AsyncMock:
    """Create a mock AsyncOpenAI client whose Responses API returns output_text."""
    mock_client = AsyncMock()
    mock_response = MagicMock()
    mock_response.output_text = output_text
    mock_client.responses.create = AsyncMock(return_value=mock_response)
    return mock_client


# =============================================================================
# Data Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def sample_data() -> dict:
    """Raw JSON payload of the bundled data set."""
    with open(DATA_FILE, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def store() -> MeasurementStore:
    """Fresh store loaded from the bundled data set."""
    return MeasurementStore.from_file(DATA_FILE)


@pytest.fixture
def description_client() -> AsyncMock:
    return create_mock_openai_client()


@pytest.fixture
def description_service(description_client) -> DescriptionService:
    return DescriptionService(client=description_client, model="test-model", predefined={})


# =============================================================================
# HTTP Client Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client(store, description_service):
    """Async test client with the store and description service overridden."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_general_ref_ranges] = lambda: {"Hemoglobina": "13.5-17.5 g/dL"}
    app.dependency_overrides[get_description_service] = lambda: description_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
