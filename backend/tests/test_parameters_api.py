"""Tests for parameter API routes."""

from unittest.mock import AsyncMock

import httpx
import openai
import pytest

from labtrend.routes.parameters import router
from labtrend.schemas.measurement import ParameterDescription


# =============================================================================
# Router structure tests
# =============================================================================


class TestParametersRouterStructure:
    def test_router_has_correct_prefix(self):
        assert router.prefix == "/parameters"

    def test_router_has_correct_tags(self):
        assert "parameters" in router.tags

    def test_router_paths(self):
        paths = {r.path for r in router.routes}
        assert "/parameters" in paths
        assert "/parameters/{name}/measurements" in paths
        assert "/parameters/{name}/description" in paths

    def test_every_route_declares_response_model(self):
        models = {r.path: r.response_model for r in router.routes}
        assert all(model is not None for model in models.values())
        assert models["/parameters/{name}/description"] is ParameterDescription


# =============================================================================
# GET /api/parameters
# =============================================================================


class TestListParameters:
    @pytest.mark.asyncio
    async def test_sorted_with_flags(self, client):
        response = await client.get("/api/parameters")
        assert response.status_code == 200
        data = response.json()
        names = [p["name"] for p in data]
        assert names == sorted(names)
        assert "Ferritina" not in names

        by_name = {p["name"]: p for p in data}
        assert by_name["Glucosa"]["flag"] == {"outOfRange": True, "trend": "high"}
        assert by_name["Glucosa"]["label"] == "Glucosa ⬆️"
        assert by_name["Hemoglobina"]["label"] == "Hemoglobina ⬇️"
        assert by_name["Leucocitos"]["label"] == "Leucocitos"
        assert by_name["Leucocitos"]["count"] == 4


# =============================================================================
# GET /api/parameters/{name}/measurements
# =============================================================================


class TestGetParameterSeries:
    @pytest.mark.asyncio
    async def test_chronological(self, client):
        response = await client.get("/api/parameters/Leucocitos/measurements")
        assert response.status_code == 200
        data = response.json()
        assert [m["date"] for m in data["measurements"]] == [
            "24/02/2025", "17/03/2025", "07/04/2025", "05/05/2025",
        ]
        assert data["measurements"][0]["refRange"] == "4,0-11,0"
        assert data["reference"] == {"min": 4.0, "max": 11.0, "text": "4,0-11,0"}
        assert data["flag"]["outOfRange"] is False

    @pytest.mark.asyncio
    async def test_name_with_space(self, client):
        response = await client.get("/api/parameters/Vitamina D/measurements")
        assert response.status_code == 200
        assert response.json()["flag"] == {"outOfRange": True, "trend": "low"}

    @pytest.mark.asyncio
    async def test_unknown_returns_404(self, client):
        response = await client.get("/api/parameters/Desconocido/measurements")
        assert response.status_code == 404
        assert response.json()["detail"] == "Parameter not found: Desconocido"


# =============================================================================
# POST /api/parameters/{name}/measurements
# =============================================================================


class TestAddMeasurement:
    @pytest.mark.asyncio
    async def test_append_recomputes_flag(self, client, store):
        # Glucosa is high before the append
        payload = {"date": "2025-06-02", "value": 90, "unit": "mg/dL", "refRange": "[74-106]"}
        response = await client.post("/api/parameters/Glucosa/measurements", json=payload)
        assert response.status_code == 201
        assert response.json()["flag"] == {"outOfRange": False, "trend": "normal"}
        assert response.json()["count"] == 4
        assert store.series("Glucosa")[-1].value == 90

        listing = await client.get("/api/parameters")
        glucosa = next(p for p in listing.json() if p["name"] == "Glucosa")
        assert glucosa["label"] == "Glucosa"

    @pytest.mark.asyncio
    async def test_older_point_does_not_change_flag(self, client):
        payload = {"date": "01/01/2024", "value": 50, "unit": "mg/dL", "refRange": "[74-106]"}
        response = await client.post("/api/parameters/Glucosa/measurements", json=payload)
        assert response.json()["flag"]["trend"] == "high"

    @pytest.mark.asyncio
    async def test_new_parameter(self, client):
        payload = {"date": "2025-06-02", "value": 20, "unit": "ng/mL", "refRange": "[30-400]", "note": "Ayunas"}
        response = await client.post("/api/parameters/Ferritina/measurements", json=payload)
        assert response.status_code == 201
        assert response.json()["label"] == "Ferritina ⬇️"

    @pytest.mark.asyncio
    async def test_invalid_body_returns_422(self, client):
        payload = {"date": "2025-06-02", "value": "alto"}
        response = await client.post("/api/parameters/Glucosa/measurements", json=payload)
        assert response.status_code == 422


# =============================================================================
# GET /api/parameters/{name}/description
# =============================================================================


class TestGetDescription:
    @pytest.mark.asyncio
    async def test_returns_generated_text(self, client, description_client):
        response = await client.get("/api/parameters/PCR/description")
        assert response.status_code == 200
        assert response.json() == {"parameter": "PCR", "description": "Descripción generada."}
        description_client.responses.create.assert_called_once()

    @pytest.mark.asyncio
    async def test_provider_failure_returns_502(self, client, description_client):
        description_client.responses.create = AsyncMock(
            side_effect=openai.APIConnectionError(
                request=httpx.Request("POST", "https://api.openai.com/v1/responses")
            )
        )
        response = await client.get("/api/parameters/PCR/description")
        assert response.status_code == 502

    @pytest.mark.asyncio
    async def test_unknown_returns_404(self, client, description_client):
        response = await client.get("/api/parameters/Desconocido/description")
        assert response.status_code == 404
        description_client.responses.create.assert_not_called()
