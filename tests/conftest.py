"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from app.logging_config import configure_logging

configure_logging()

from app.main import app


@pytest.fixture(scope="session")
def test_client() -> TestClient:
    """Provide a FastAPI test client."""

    return TestClient(app)


@pytest.fixture()
def mixed_confidence_sets() -> List[Dict[str, Any]]:
    """Sets where the numerically largest e1RM has the lowest confidence."""

    return [
        {"weight": 100, "reps": 10},  # low, ~133.4
        {"weight": 95, "reps": 3},  # high, ~100.6
        {"weight": 90, "reps": 6},  # medium, ~104.5
    ]


@pytest.fixture()
def lift_history() -> List[Dict[str, Any]]:
    """Three months of logged sets across main lifts and accessories."""

    return [
        {"exercise_name": "Barbell Bench Press", "weight": 85, "reps": 5, "date": "2025-04-20"},
        {"exercise_name": "Bench Press", "weight": 100, "reps": 10, "date": "2025-05-01"},
        {"exercise_name": "bench press", "weight": 95, "reps": 3, "date": "2025-05-10"},
        {"exercise_name": "Back Squat", "weight": 140, "reps": 2, "date": "2025-04-15"},
        {"exercise_name": "Back Squat", "weight": 150, "reps": 1, "date": "2025-06-25"},
        {"exercise_name": "Deadlift", "weight": 0, "reps": 5, "date": "2025-06-01"},
        {"exercise_name": "Bicep Curl", "weight": 20, "reps": 12, "date": "2025-06-01"},
    ]
