"""
Test Target Operating Model API endpoints
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.dependencies import get_config_store
from d3_operating_model.api import router

# Mark entire module as unit test
pytestmark = pytest.mark.unit


@pytest.fixture
def client(config_store):
    app = FastAPI()
    app.include_router(router, prefix="/api/v1/operating-model")
    app.dependency_overrides[get_config_store] = lambda: config_store
    return TestClient(app)


class TestDerivePhaseAPI:
    def test_status_match(self, client):
        response = client.post("/api/v1/operating-model/derive-phase", json={"use_case_status": "Implemented"})

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "transition"
        assert data["matched_by"] == "status"
        assert data["is_override"] is False

    def test_manual_override(self, client):
        response = client.post(
            "/api/v1/operating-model/derive-phase",
            json={"use_case_status": "Discovery", "tom_phase_override": "steady_state"},
        )

        assert response.json()["id"] == "steady_state"
        assert response.json()["is_override"] is True

    def test_unmapped(self, client):
        response = client.post("/api/v1/operating-model/derive-phase", json={})

        assert response.status_code == 200
        assert response.json()["id"] == "unmapped"

    def test_disabled_inline_config(self, client):
        response = client.post(
            "/api/v1/operating-model/derive-phase",
            json={"use_case_status": "In-flight", "config": {"enabled": False}},
        )

        assert response.json()["id"] == "disabled"

    def test_invalid_inline_config(self, client):
        response = client.post(
            "/api/v1/operating-model/derive-phase",
            json={"config": {"enabled": True, "active_preset": "missing", "presets": {"coe_led": {"name": "CoE"}}}},
        )

        assert response.status_code == 422


class TestListPhasesAPI:
    def test_active_preset_applied(self, client, config_store):
        document = config_store.get_document("tom")
        config_store.save_document("tom", dict(document.data, active_preset="centralized"), document.sha)

        response = client.get("/api/v1/operating-model/phases")

        assert response.status_code == 200
        data = response.json()
        assert data["active_preset"] == "centralized"
        assert [phase["id"] for phase in data["phases"]] == ["foundation", "strategic", "transition", "steady_state"]
        assert data["phases"][0]["expected_duration_weeks"] == 12
        assert data["staffing_ratios"]["foundation"] == {"vendor": 0.9, "client": 0.1}
        assert data["delivery_tracks"][0]["id"] == "single_track"
