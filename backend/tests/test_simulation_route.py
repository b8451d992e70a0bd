"""Tests for the /api/simulation, /api/stats and /api/reference endpoints."""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from minpaku.api.deps import get_gateway
from minpaku.errors import StorageError
from minpaku.main import app
from minpaku.services.simulation_service import record_submission
from minpaku.models.record import SimulationSubmission
from minpaku.models.simulation import MAX_AMOUNT
from minpaku.simulation.reference_data import DEFAULT_REFERENCE_DATA

_SAMPLE_SUBMISSION = {
    "region": "Tokyo",
    "propertyType": "1K",
    "monthlyRent": 100000,
    "initialCost": 1000000,
    "includeFurniture": False,
    "renovationCost": 0,
    "managementFeeRate": 10,
    "results": {
        "annualRevenue": 6387500,
        "annualCost": 2210750,
        "annualProfit": 4176750,
        "annualYield": "417.7",
        "paybackPeriod": "0.2",
    },
}


def _submission(**overrides) -> dict:
    body = dict(_SAMPLE_SUBMISSION)
    body.update(overrides)
    return body


def _failing_client() -> TestClient:
    gateway = MagicMock()
    gateway.save.side_effect = StorageError("Failed to save simulation")
    gateway.query_stats.side_effect = StorageError("Failed to fetch statistics")
    app.dependency_overrides[get_gateway] = lambda: gateway
    return TestClient(app)


@pytest.fixture
def failing_client():
    try:
        yield _failing_client()
    finally:
        app.dependency_overrides.pop(get_gateway, None)


# --- POST /api/simulation ---


def test_save_returns_200_with_id(client):
    response = client.post("/api/simulation", json=_SAMPLE_SUBMISSION)
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert isinstance(data["simulationId"], int)


def test_save_without_results_is_accepted(client):
    body = _submission()
    del body["results"]
    response = client.post("/api/simulation", json=body)
    assert response.status_code == 200


def test_saved_record_is_readable(client):
    simulation_id = client.post("/api/simulation", json=_SAMPLE_SUBMISSION).json()["simulationId"]
    response = client.get(f"/api/simulation/{simulation_id}")
    assert response.status_code == 200
    record = response.json()
    assert record["region"] == "Tokyo"
    assert record["propertyType"] == "1K"
    assert record["furnitureCost"] == 0
    assert record["annualRevenue"] == 6387500
    assert record["paybackPeriod"] == "0.2"


def test_client_results_are_recomputed(client):
    tampered = _submission(results={
        "annualRevenue": 1,
        "annualCost": 1,
        "annualProfit": 999_999_999,
        "annualYield": "9999.9",
        "paybackPeriod": "0.1",
    })
    simulation_id = client.post("/api/simulation", json=tampered).json()["simulationId"]
    record = client.get(f"/api/simulation/{simulation_id}").json()
    assert record["annualProfit"] == 4176750
    assert record["annualYield"] == pytest.approx(417.7)


def test_trusted_client_results_are_stored(gateway):
    submission = SimulationSubmission(**_submission(results={
        "annualRevenue": 1,
        "annualCost": 2,
        "annualProfit": -1,
        "annualYield": "-0.1",
        "paybackPeriod": "∞",
    }))
    simulation_id = record_submission(
        submission, gateway, DEFAULT_REFERENCE_DATA, trust_client_results=True,
    )
    record = gateway.get(simulation_id)
    assert record.annual_profit == -1
    assert record.payback_period == "∞"


def test_missing_numeric_field_returns_400(client):
    body = _submission()
    del body["monthlyRent"]
    response = client.post("/api/simulation", json=body)
    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert any("monthlyRent" in err["loc"] for err in data["errors"])


def test_negative_rent_returns_400(client):
    response = client.post("/api/simulation", json=_submission(monthlyRent=-5))
    assert response.status_code == 400


def test_unknown_region_returns_400(client):
    response = client.post("/api/simulation", json=_submission(region="Atlantis"))
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "Atlantis" in response.json()["message"]


def test_unknown_property_type_returns_400(client):
    response = client.post("/api/simulation", json=_submission(propertyType="Castle"))
    assert response.status_code == 400


def test_storage_failure_returns_500(failing_client):
    response = failing_client.post("/api/simulation", json=_SAMPLE_SUBMISSION)
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Failed to save simulation"}


def test_unconfigured_database_returns_500():
    # Default dependency: pool was never initialized
    response = TestClient(app).post("/api/simulation", json=_SAMPLE_SUBMISSION)
    assert response.status_code == 500
    # Driver and configuration detail stays in the log
    assert response.json() == {"success": False, "message": "Failed to save simulation"}


def test_get_missing_simulation_returns_404(client):
    response = client.get("/api/simulation/12345")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Simulation 12345 not found"}


# --- POST /api/simulation/calculate ---


def test_calculate_returns_result_without_saving(client):
    body = _submission()
    del body["results"]
    response = client.post("/api/simulation/calculate", json=body)
    assert response.status_code == 200
    assert response.json() == {
        "annualRevenue": 6387500,
        "annualCost": 2210750,
        "annualProfit": 4176750,
        "annualYield": "417.7",
        "paybackPeriod": "0.2",
    }
    assert client.get("/api/stats").json()["stats"] == []


def test_calculate_loss_making_reports_infinite_payback(client):
    body = _submission(region="Hokkaido", monthlyRent=200000, managementFeeRate=30)
    del body["results"]
    data = client.post("/api/simulation/calculate", json=body).json()
    assert data["annualYield"] == "-66.4"
    assert data["paybackPeriod"] == "∞"


# --- GET /api/stats ---


def test_stats_round_trip(client):
    client.post("/api/simulation", json=_SAMPLE_SUBMISSION)
    client.post("/api/simulation", json=_SAMPLE_SUBMISSION)
    client.post("/api/simulation", json=_submission(region="Osaka"))

    response = client.get("/api/stats")
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    stats = data["stats"]
    assert [s["region"] for s in stats] == ["Tokyo", "Osaka"]
    assert stats[0]["total_simulations"] == 2
    assert stats[0]["region_count"] == 2
    assert stats[0]["avg_yield"] == pytest.approx(417.7)
    assert set(stats[0]) == {
        "region", "total_simulations", "avg_yield", "avg_payback_period", "region_count",
    }


def test_stats_storage_failure_returns_500(failing_client):
    response = failing_client.get("/api/stats")
    assert response.status_code == 500
    assert response.json()["success"] is False


# --- GET /api/reference ---


def test_reference_lists_regions_and_property_types(client):
    data = client.get("/api/reference").json()
    tokyo = next(r for r in data["regions"] if r["name"] == "Tokyo")
    assert tokyo["occupancy_rate"] == 70
    assert tokyo["average_daily_rate"] == 25000
    assert len(data["regions"]) == 7
    assert {"name": "3LDK", "max_guests": 6} in data["property_types"]


def test_oversized_rent_returns_400(client):
    body = _submission(monthlyRent=10**30)
    del body["results"]
    for path in ("/api/simulation", "/api/simulation/calculate"):
        response = client.post(path, json=body)
        assert response.status_code == 400
        assert response.json()["success"] is False


def test_rent_at_ceiling_is_calculated(client):
    body = _submission(monthlyRent=MAX_AMOUNT)
    del body["results"]
    response = client.post("/api/simulation/calculate", json=body)
    assert response.status_code == 200
    assert response.json()["paybackPeriod"] == "∞"
