"""Integration tests for the strength API endpoints."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


def test_health_endpoints(test_client: TestClient):
    assert test_client.get("/health").json() == {"status": "ok"}

    response = test_client.get("/api/health/status")
    assert response.status_code == 200
    assert response.json()["status"] == "online"
    assert response.json()["default_weight_unit"] in {"kg", "lbs"}


def test_e1rm_endpoint(test_client: TestClient):
    response = test_client.get("/api/strength/e1rm?weight=100&reps=5&unit=kg")

    assert response.status_code == 200
    data = response.json()
    assert data["e1rm"] == 112.5
    assert data["confidence"] == "medium"
    assert data["source"] == {"weight": 100.0, "reps": 5}
    assert data["unit"] == "kg"
    assert data["display_unit"] == "kg"
    assert data["display_e1rm"] == 112.5


def test_e1rm_endpoint_converts_display_unit(test_client: TestClient):
    response = test_client.get("/api/strength/e1rm?weight=100&reps=5&unit=kg&display_unit=lbs")

    assert response.status_code == 200
    data = response.json()
    assert data["e1rm"] == 112.5
    assert data["display_unit"] == "lbs"
    assert data["display_e1rm"] == 248.0  # 112.5 * 2.20462


def test_e1rm_endpoint_rejects_invalid_weight(test_client: TestClient):
    response = test_client.get("/api/strength/e1rm?weight=0&reps=5")

    assert response.status_code == 400
    assert "Weight" in response.json()["detail"]


def test_e1rm_endpoint_rejects_invalid_reps(test_client: TestClient):
    response = test_client.get("/api/strength/e1rm?weight=100&reps=-1")

    assert response.status_code == 400
    assert "Repetitions" in response.json()["detail"]


def test_e1rm_endpoint_rejects_unknown_unit(test_client: TestClient):
    response = test_client.get("/api/strength/e1rm?weight=100&reps=5&unit=stone")
    assert response.status_code == 422


def test_percentages_endpoint(test_client: TestClient):
    response = test_client.get("/api/strength/percentages?e1rm=100")

    assert response.status_code == 200
    assert response.json() == {"light": 65, "moderate": 75, "heavy": 85, "maxEffort": 95}


def test_percentages_endpoint_rejects_negative(test_client: TestClient):
    response = test_client.get("/api/strength/percentages?e1rm=-5")
    assert response.status_code == 422


def test_non_finite_query_values_are_rejected(test_client: TestClient):
    for url in (
        "/api/strength/percentages?e1rm=inf",
        "/api/strength/e1rm?weight=inf&reps=5",
        "/api/strength/improvement?current=nan&previous=100",
    ):
        assert test_client.get(url).status_code == 422, url


def test_overflowing_results_are_client_errors(test_client: TestClient):
    response = test_client.get("/api/strength/improvement?current=1e300&previous=1e-10")
    assert response.status_code == 400

    response = test_client.get("/api/strength/e1rm?weight=1e308&reps=5&unit=kg&display_unit=lbs")
    assert response.status_code == 400
    assert "lbs" in response.json()["detail"]


def test_improvement_endpoint(test_client: TestClient):
    response = test_client.get("/api/strength/improvement?current=110&previous=100")

    assert response.status_code == 200
    assert response.json()["improvement_percent"] == 10.0

    response = test_client.get("/api/strength/improvement?current=100&previous=0")
    assert response.json()["improvement_percent"] == 0.0


def test_best_endpoint_prefers_confidence(test_client: TestClient, mixed_confidence_sets):
    response = test_client.post("/api/strength/best", json={"observations": mixed_confidence_sets})

    assert response.status_code == 200
    data = response.json()
    assert data["estimate"]["confidence"] == "high"
    assert data["estimate"]["source"]["reps"] == 3
    assert data["observations_received"] == 3
    assert data["observations_used"] == 3


def test_best_endpoint_filters_invalid_sets(test_client: TestClient):
    payload = {
        "observations": [
            {"weight": 0, "reps": 5},
            {"weight": 100, "reps": 0},
            {"weight": 100, "reps": 5, "date": "2025-05-01"},
        ]
    }
    response = test_client.post("/api/strength/best", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["estimate"]["source"] == {"weight": 100.0, "reps": 5}
    assert data["observations_used"] == 1


def test_best_endpoint_returns_null_without_usable_sets(test_client: TestClient):
    response = test_client.post("/api/strength/best", json={"observations": []})

    assert response.status_code == 200
    assert response.json()["estimate"] is None

    response = test_client.post(
        "/api/strength/best", json={"observations": [{"weight": 100, "reps": 30}]}
    )
    assert response.json()["estimate"] is None
    assert response.json()["observations_used"] == 0


def test_best_endpoint_validates_payload(test_client: TestClient):
    response = test_client.post("/api/strength/best", json={"observations": [{"weight": "heavy"}]})
    assert response.status_code == 422


def test_personal_records_endpoint(test_client: TestClient, lift_history):
    response = test_client.post(
        "/api/strength/personal-records",
        json={"workouts": lift_history, "as_of": "2025-06-30", "unit": "kg"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["as_of"] == "2025-06-30"
    assert data["exercises_tracked"] == 4

    records = {record["lift"]: record for record in data["records"]}
    assert set(records) == {"Squat", "Bench Press"}

    bench = records["Bench Press"]
    assert bench["estimate"]["e1rm"] == 100.6
    assert bench["estimate"]["confidence"] == "high"
    assert bench["achieved_at"] == "2025-05-10"
    assert bench["monthly_progress"] == -32.8
    assert bench["unit"] == "kg"
    assert bench["display_unit"] == "kg"
    assert bench["display_e1rm"] == 100.6

    squat = records["Squat"]
    assert squat["estimate"]["e1rm"] == 150.0
    assert squat["monthly_progress"] == 6.0


def test_best_endpoint_rejects_non_finite_weight(test_client: TestClient):
    response = test_client.post(
        "/api/strength/best", json={"observations": [{"weight": "inf", "reps": 5}]}
    )
    assert response.status_code == 422


def test_best_endpoint_handles_huge_weight(test_client: TestClient):
    response = test_client.post(
        "/api/strength/best", json={"observations": [{"weight": 1e308, "reps": 5}]}
    )

    assert response.status_code == 200
    assert response.json()["estimate"]["e1rm"] == pytest.approx(1e308 / 0.8888)


def test_personal_records_endpoint_converts_display_unit(test_client: TestClient, lift_history):
    response = test_client.post(
        "/api/strength/personal-records",
        json={"workouts": lift_history, "as_of": "2025-06-30", "unit": "kg", "display_unit": "lbs"},
    )

    assert response.status_code == 200
    records = {record["lift"]: record for record in response.json()["records"]}

    squat = records["Squat"]
    assert squat["unit"] == "kg"
    assert squat["estimate"]["e1rm"] == 150.0
    assert squat["display_unit"] == "lbs"
    assert squat["display_e1rm"] == 330.7  # 150 * 2.20462
    assert squat["display_monthly_progress"] == 13.2  # 6.0 * 2.20462

    bench = records["Bench Press"]
    assert bench["display_e1rm"] == 221.8
    assert bench["display_monthly_progress"] == -72.3


def test_personal_records_endpoint_empty_history(test_client: TestClient):
    response = test_client.post("/api/strength/personal-records", json={"workouts": []})

    assert response.status_code == 200
    data = response.json()
    assert data["records"] == []
    assert data["exercises_tracked"] == 0
