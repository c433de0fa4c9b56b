"""
Test portfolio API endpoints
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.dependencies import get_config_store
from d4_portfolio.api import router
from tests.helpers import make_use_case

# Mark entire module as unit test
pytestmark = pytest.mark.unit


@pytest.fixture
def client(config_store):
    app = FastAPI()
    app.include_router(router, prefix="/api/v1/portfolio")
    app.dependency_overrides[get_config_store] = lambda: config_store
    return TestClient(app)


@pytest.fixture
def use_cases():
    return [
        make_use_case(5, 1, id="uc-1", use_case_status="In-flight"),
        make_use_case(2, 4, id="uc-2", use_case_status="Discovery"),
        {"id": "uc-3"},
    ]


class TestSummaryAPI:
    def test_summary(self, client, use_cases):
        response = client.post("/api/v1/portfolio/summary", json={"use_cases": use_cases})

        assert response.status_code == 200
        data = response.json()
        assert data["total_use_cases"] == 3
        assert data["scored_use_cases"] == 2
        assert data["quadrant_distribution"]["Quick Win"] == 1
        assert data["quadrant_distribution"]["Watchlist"] == 1
        assert data["quadrant_distribution"]["Unassigned"] == 1
        assert data["average_impact"] == 3.5
        assert data["size_distribution"]["S"] == 1
        assert data["phase_summary"]["strategic"] == 1
        assert data["phase_summary"]["foundation"] == 1
        assert data["phase_summary"]["unmapped"] == 1
        assert [point["id"] for point in data["matrix_points"]] == ["uc-1", "uc-2"]

    def test_summary_without_sizing_or_phases(self, client, use_cases):
        response = client.post(
            "/api/v1/portfolio/summary",
            json={"use_cases": use_cases, "include_sizing": False, "include_phases": False},
        )

        data = response.json()
        assert data["size_distribution"] == {}
        assert data["phase_summary"] == {}
        assert data["total_cost_min"] is None

    def test_empty_portfolio(self, client):
        response = client.post("/api/v1/portfolio/summary", json={"use_cases": []})

        assert response.status_code == 200
        assert response.json()["average_impact"] is None

    def test_out_of_range_lever(self, client):
        response = client.post("/api/v1/portfolio/summary", json={"use_cases": [make_use_case(7, 1)]})

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "VALIDATION_ERROR"

    def test_boolean_lever_refused(self, client):
        response = client.post("/api/v1/portfolio/summary", json={"use_cases": [make_use_case(True, 1)]})

        assert response.status_code == 422


class TestScoreAPI:
    def test_score_results(self, client, use_cases):
        response = client.post("/api/v1/portfolio/score", json={"use_cases": use_cases, "threshold": 4.0})

        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["id"] for r in results] == ["uc-1", "uc-2", "uc-3"]
        assert results[0]["classification"]["threshold"] == 4.0
        assert results[0]["classification"]["quadrant"] == "Quick Win"
        assert results[2]["size_estimate"]["reason"] == "scores_missing"

    @pytest.mark.parametrize("threshold", ["3.0", True])
    def test_threshold_must_be_a_number(self, client, use_cases, threshold):
        response = client.post("/api/v1/portfolio/score", json={"use_cases": use_cases, "threshold": threshold})

        assert response.status_code == 422
