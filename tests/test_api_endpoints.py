"""
HealthLens API Endpoint Tests
=============================
FastAPI TestClient against main.app with the remote client and session
store swapped through dependency_overrides. No network.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from healthlens.dependencies import get_client, get_session_store
from healthlens.integrations.healthlens_client import HealthLensClient
from healthlens.session.store import InMemorySessionStore
from main import app


BASE_URL = "https://healthlens.test/api/v1"


# ============================================
# FIXTURES
# ============================================

@pytest.fixture
def store():
    return InMemorySessionStore()


def make_api(remote_client, store):
    app.dependency_overrides[get_client] = lambda: remote_client
    app.dependency_overrides[get_session_store] = lambda: store
    return TestClient(app)


@pytest.fixture
def api(store):
    """API with remote calls disabled (static catalog, local scorer)."""
    yield make_api(HealthLensClient(base_url=BASE_URL, enabled=False), store)
    app.dependency_overrides.clear()


@pytest.fixture
def remote_api(store):
    """API whose remote service answers every persona call."""
    def handler(request):
        if request.url.path.endswith("/persona/calculate"):
            return httpx.Response(200, json={"persona": "guided", "confidence": 0.91, "reasoning": "Wants a plan"})
        if "/persona/info/" in request.url.path:
            label = request.url.path.rsplit("/", 1)[-1]
            return httpx.Response(200, json={"persona": label, "name": f"Remote {label}", "strengths": ["s"], "focus_areas": ["f"]})
        return httpx.Response(404, json={"detail": "not found"})

    client = HealthLensClient(base_url=BASE_URL, enabled=True, transport=httpx.MockTransport(handler))
    yield make_api(client, store)
    app.dependency_overrides.clear()


@pytest.fixture
def complete_answers():
    return {
        "trackingStyle": "quick-bold",
        "motivation": "fast-action",
        "timeSpent": "fast-bold",
        "techComfort": "beginner",
        "dashboardPreference": "snapshot",
    }


@pytest.fixture
def lab_results():
    return [
        {"name": "Glucose", "value": 98, "unit": "mg/dL", "referenceRange": {"min": 70, "max": 99}},
        {"name": "White Blood Cells", "value": 11.2, "unit": "K/uL", "referenceRange": {"min": 4.5, "max": 11.0}},
    ]


# ============================================
# ROOT
# ============================================

class TestRoot:

    def test_health(self, api):
        response = api.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_persona_health(self, api):
        data = api.get("/api/v1/persona/health").json()
        assert data["module"] == "persona_engine"
        assert data["remote_enabled"] is False


# ============================================
# PERSONA ROUTER
# ============================================

class TestPersonaEndpoints:

    def test_questionnaire(self, api):
        data = api.get("/api/v1/persona/questionnaire").json()

        assert data["count"] == 5
        weights = {q["id"]: q["weight"] for q in data["questions"]}
        assert weights == {
            "tracking_style": 3,
            "motivation": 2,
            "time_spent": 2,
            "tech_comfort": 2,
            "dashboard_preference": 1,
        }

    def test_score(self, api, complete_answers):
        response = api.post("/api/v1/persona/score", json=complete_answers)

        assert response.status_code == 200
        data = response.json()
        assert data["persona"] == "quick-bold"
        assert data["view"] == "bold"
        assert data["scores"]["quick-bold"] == 7

    def test_score_incomplete(self, api):
        response = api.post("/api/v1/persona/score", json={"trackingStyle": "casual"})

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "QUESTIONNAIRE_INCOMPLETE"
        assert "motivation" in detail["missing_fields"]

    def test_assign_local(self, api, store, complete_answers):
        response = api.post("/api/v1/persona/assign", json={
            "session_id": "abc",
            "questionnaire_responses": complete_answers,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["label"] == "quick-bold"
        assert data["source"] == "local"
        assert data["metadata"]["name"] == "THE ACHIEVER"
        assert data["warnings"] == []
        assert store.get("abc:userPersona") == "quick-bold"

    def test_assign_remote(self, remote_api, complete_answers):
        data = remote_api.post("/api/v1/persona/assign", json={
            "user_profile": {"age": 65},
            "questionnaire_responses": complete_answers,
        }).json()

        assert data["label"] == "guided"
        assert data["local_label"] == "quick-bold"
        assert data["confidence"] == 0.91
        assert data["metadata"]["name"] == "Remote guided"

    def test_info_static(self, api):
        data = api.get("/api/v1/persona/info/power").json()
        assert data["name"] == "THE COMMANDER"
        assert data["source"] == "static"

    def test_info_unknown_label(self, api):
        data = api.get("/api/v1/persona/info/wizard").json()
        assert data["persona"] == "balanced"

    def test_view(self, api):
        assert api.get("/api/v1/persona/view/passive").json()["view"] == "bold"
        assert api.get("/api/v1/persona/view/wizard").json()["view"] == "detailed"

    def test_session_roundtrip(self, api):
        empty = api.get("/api/v1/persona/session/s9").json()
        assert empty["stored"] is False
        assert empty["label"] == "balanced"

        switched = api.put("/api/v1/persona/session/s9", json={"persona": "beginner"}).json()
        assert switched["view"] == "bold"

        state = api.get("/api/v1/persona/session/s9").json()
        assert state["stored"] is True
        assert state["label"] == "beginner"
        assert state["view"] == "bold"


# ============================================
# LABS ROUTER
# ============================================

class TestLabEndpoints:

    def test_classify(self, api, lab_results):
        data = api.post("/api/v1/labs/classify", json={"lab_results": lab_results}).json()

        assert [r["status"] for r in data["lab_results"]] == ["normal", "high"]
        assert data["lab_results"][1]["deviation"] == 0.2
        assert data["summary"]["abnormal"] == 1
        assert "1 area(s) that need attention" in data["summary_text"]

    def test_classify_inverted_range(self, api):
        response = api.post("/api/v1/labs/classify", json={"lab_results": [
            {"name": "Glucose", "value": 98, "referenceRange": {"min": 99, "max": 70}},
        ]})
        assert response.status_code == 422

    def test_abnormal(self, api, lab_results):
        data = api.post("/api/v1/labs/abnormal", json={"persona": "analytical", "lab_results": lab_results}).json()

        assert data["view"] == "detailed"
        assert data["abnormal_count"] == 1
        assert "Status: HIGH" in data["findings"]

    def test_local_adaptive_view(self, api, lab_results):
        data = api.post("/api/v1/labs/adaptive-view", json={"persona": "casual", "lab_results": lab_results}).json()

        assert data["source"] == "local"
        assert data["ui_components"]["layout"] == "bold_view"

    def test_remote_adaptive_view_falls_back(self, remote_api):
        response = remote_api.get("/api/v1/labs/adaptive-view/user-1", params={"persona": "power"})

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "local"
        assert data["persona"] == "power"
        assert data["lab_results"] == []


# ============================================
# REMOTE ADAPTIVE VIEW
# ============================================

@pytest.fixture
def data_api(store):
    """Factory: API whose remote service answers through the given handler."""
    def build(handler):
        client = HealthLensClient(base_url=BASE_URL, enabled=True, transport=httpx.MockTransport(handler))
        return make_api(client, store)

    yield build
    app.dependency_overrides.clear()


class TestRemoteAdaptiveView:

    def test_remote_persona_decides(self, data_api):
        def handler(request):
            if request.url.path.endswith("/adaptive-view"):
                return httpx.Response(200, json={
                    "persona": "quick-bold",
                    "ui_components": {
                        "layout": "bold_view",
                        "components": {
                            "header": {"title": "Your Results"},
                            "results_view": {"type": "status_cards", "config": {"type": "status_cards"}},
                            "summary": {"content": "All good"},
                        },
                    },
                })
            return httpx.Response(404, json={"detail": "not found"})

        data = data_api(handler).get("/api/v1/labs/adaptive-view/user-1").json()

        assert data["source"] == "remote"
        assert data["persona"] == "quick-bold"
        assert data["ui_components"]["persona"] == "quick-bold"
        assert data["ui_components"]["layout"] == "bold_view"

    def test_fallback_uses_stored_lab_results(self, data_api, lab_results):
        seen = []

        def handler(request):
            seen.append(request.url.path)
            if request.url.path.endswith("/data/lab-results/user-1"):
                return httpx.Response(200, json={"lab_results": lab_results})
            return httpx.Response(503, text="Service Unavailable")

        data = data_api(handler).get(
            "/api/v1/labs/adaptive-view/user-1",
            params={"persona": "analytical"},
        ).json()

        assert seen == ["/api/v1/adaptive-view", "/api/v1/data/lab-results/user-1"]
        assert data["source"] == "local"
        assert data["persona"] == "analytical"
        assert data["ui_components"]["layout"] == "dashboard_view"
        assert [r["status"] for r in data["lab_results"]] == ["normal", "high"]

    def test_fallback_without_persona_is_balanced(self, data_api):
        data = data_api(lambda request: httpx.Response(503, text="down")).get(
            "/api/v1/labs/adaptive-view/user-1"
        ).json()

        assert data["persona"] == "balanced"
        assert data["lab_results"] == []
