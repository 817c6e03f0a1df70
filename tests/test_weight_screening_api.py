"""
Weight Screening API Tests
Covers table endpoints, single evaluation, roster screening and status.
"""

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi import FastAPI
from fastapi.testclient import TestClient

from weight_screening.api import API_PREFIX, register_weight_screening_endpoints
from weight_screening.engine import StandardsTable


@pytest.fixture(autouse=True)
def reset_singleton():
    StandardsTable.reset()
    yield
    StandardsTable.reset()


@pytest.fixture
def client():
    app = FastAPI()
    register_weight_screening_endpoints(app)
    return TestClient(app)


# ============================================================================
# Table endpoints
# ============================================================================

class TestTableEndpoints:

    def test_full_table(self, client):
        response = client.get(f"{API_PREFIX}/table")
        assert response.status_code == 200
        body = response.json()
        assert body["row_count"] == 23
        assert body["min_height"] == 58
        assert body["max_height"] == 80
        assert [r["height"] for r in body["rows"]] == list(range(58, 81))

    def test_single_row(self, client):
        response = client.get(f"{API_PREFIX}/table/60")
        assert response.status_code == 200
        assert response.json() == {
            "height": 60,
            "min_weight": 97,
            "male_max": [132, 136, 139, 141],
            "female_max": [128, 129, 131, 133],
        }

    @pytest.mark.parametrize("height", [57, 81])
    def test_row_outside_table_is_404(self, client, height):
        response = client.get(f"{API_PREFIX}/table/{height}")
        assert response.status_code == 404
        assert "58-80" in response.json()["detail"]

    def test_age_groups(self, client):
        body = client.get(f"{API_PREFIX}/age-groups").json()
        assert body["minimum_age"] == 17
        assert body["age_groups"][0] == {"group": 1, "min_age": 17, "max_age": 20}
        assert body["age_groups"][3] == {"group": 4, "min_age": 40, "max_age": None}


# ============================================================================
# Evaluate
# ============================================================================

class TestEvaluateEndpoint:

    def test_over(self, client):
        response = client.post(f"{API_PREFIX}/evaluate", json={
            "gender": "female", "age": 30, "height": 60, "weight": 132,
        })
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OVER"
        assert body["standard"] == {"min": 97, "max": 131}
        assert body["actual"] == 132
        assert body["delta"] == 1
        assert body["age_group"] == 3
        assert body["is_resolved"] is True
        assert "by 1 lbs" in body["description"]

    def test_gender_case_insensitive(self, client):
        response = client.post(f"{API_PREFIX}/evaluate", json={
            "gender": "FEMALE", "age": 30, "height": 60, "weight": 97,
        })
        assert response.status_code == 200
        assert response.json()["status"] == "COMPLIANT"
        assert response.json()["gender"] == "female"

    def test_scalar_outcome_is_200(self, client):
        response = client.post(f"{API_PREFIX}/evaluate", json={
            "gender": "male", "age": 5, "height": 200, "weight": 150,
        })
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "HEIGHT_NOT_WITHIN_BOUNDS"
        assert body["standard"] is None
        assert body["delta"] is None
        assert body["age_group"] is None
        assert body["is_resolved"] is False

    def test_unknown_gender_is_422(self, client):
        response = client.post(f"{API_PREFIX}/evaluate", json={
            "gender": "robot", "age": 30, "height": 60, "weight": 120,
        })
        assert response.status_code == 422

    def test_missing_field_is_422(self, client):
        response = client.post(f"{API_PREFIX}/evaluate", json={
            "gender": "male", "age": 30, "height": 60,
        })
        assert response.status_code == 422


# ============================================================================
# Screen
# ============================================================================

class TestScreenEndpoint:

    ROSTER = {
        "subjects": [
            {"subject_id": "S1", "gender": "male", "age": 22, "height": 70, "weight": 190},
            {"subject_id": "S2", "gender": "male", "age": 22, "height": 58, "weight": 120},
            {"gender": "female", "age": 41, "height": 66, "weight": 150},
        ]
    }

    def test_screen_roster(self, client):
        response = client.post(f"{API_PREFIX}/screen", json=self.ROSTER)
        assert response.status_code == 200
        body = response.json()
        assert body["summary"]["total"] == 3
        assert body["summary"]["over"] == 1
        assert body["summary"]["no_standard_available"] == 1
        assert body["summary"]["compliant"] == 1
        assert [s["subject_id"] for s in body["subjects"]] == ["S1", "S2", "subject_3"]
        assert body["subjects"][0]["delta"] == 5

    def test_screen_hashes_stable(self, client):
        first = client.post(f"{API_PREFIX}/screen", json=self.ROSTER).json()
        second = client.post(f"{API_PREFIX}/screen", json=self.ROSTER).json()
        assert first["input_hash"] == second["input_hash"]
        assert first["output_hash"] == second["output_hash"]


# ============================================================================
# Status / app wiring
# ============================================================================

class TestStatus:

    def test_status(self, client):
        body = client.get(f"{API_PREFIX}/status").json()
        assert body["status"] == "operational"
        assert body["table"]["row_count"] == 23
        assert len(body["outcomes"]) == 6

    def test_main_app_health(self):
        from main import app

        response = TestClient(app).get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["table_rows"] == 23
