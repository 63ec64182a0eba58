"""
BrainWave API Tests

HTTP surface over an in-memory orchestrator.
"""

import pytest
from fastapi.testclient import TestClient

from api_server import app
from brainwave.orchestrate import FocusOrchestrator, get_orchestrator
from brainwave.store.records import InMemoryRecordStore


REFERENCE_INPUT = {
    "age": 22,
    "sleep_hours": 8,
    "stress_level": 3,
    "exercise_frequency": "daily",
    "caffeine": "low",
    "screen_time": 3,
    "work_type": "analytical",
}


@pytest.fixture
def orchestrator(tone, clock):
    return FocusOrchestrator(InMemoryRecordStore(), tone=tone, clock=clock)


@pytest.fixture
def client(orchestrator):
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestMeta:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"status": "BrainWave API Running", "version": "1.0.0"}

    def test_health(self, client):
        body = client.get("/api/v1/health").json()
        assert body["status"] == "healthy"
        assert body["store"] == {"backend": "memory"}


class TestAnalyzeEndpoint:

    def test_reference_profile(self, client):
        response = client.post("/api/analyze", json=REFERENCE_INPUT)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["user_id"].startswith("user_")
        assert body["analysis"] == {
            "max_concentration": 81,
            "recommended_break": 24,
            "break_interval": 49,
            "alpha_frequency": 12,
        }
        assert body["recommendations"] == [{
            "category": "Work Pattern",
            "priority": "high",
            "message": "Work in 81 min blocks with 24 min breaks",
        }]

    def test_explicit_user_id_and_lookup(self, client):
        client.post("/api/analyze", json=dict(REFERENCE_INPUT, user_id="user_42"))

        response = client.get("/api/user/user_42")

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["user_id"] == "user_42"
        assert user["lifestyle"]["exercise_frequency"] == "daily"
        assert user["profile"]["max_concentration"] == 81

    def test_camel_case_payload(self, client):
        response = client.post("/api/analyze", json={
            "age": 22,
            "sleepHours": 8,
            "stressLevel": 3,
            "exerciseFrequency": "daily",
            "caffeine": "low",
            "screenTime": 3,
            "workType": "analytical",
            "userId": "user_camel",
        })

        assert response.status_code == 200
        assert response.json()["user_id"] == "user_camel"
        assert response.json()["analysis"]["max_concentration"] == 81

    @pytest.mark.parametrize("field,value", [
        ("stress_level", 11),
        ("sleep_hours", "lots"),
        ("caffeine", "espresso"),
    ])
    def test_invalid_input(self, client, field, value):
        response = client.post("/api/analyze", json=dict(REFERENCE_INPUT, **{field: value}))

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "INVALID_INPUT"
        assert body["error"]["details"][0]["field"] == field

    def test_missing_field(self, client):
        data = dict(REFERENCE_INPUT)
        del data["age"]
        response = client.post("/api/analyze", json=data)
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_INPUT"

    def test_unknown_user(self, client):
        response = client.get("/api/user/user_nope")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"


class TestSessionEndpoints:

    def test_full_session(self, client, clock, tone):
        user_id = client.post("/api/analyze", json=REFERENCE_INPUT).json()["user_id"]

        started = client.post("/api/session/start", json={"user_id": user_id}).json()
        sid = started["session_id"]
        assert started["session"]["state"] == "active"

        lapse = client.post("/api/session/break", json={"session_id": sid}).json()
        assert lapse["session"]["state"] == "paused"
        assert lapse["session"]["concentration_breaks"] == 1
        assert tone.calls == [("play", 12)]

        client.post("/api/session/break", json={"session_id": sid})
        refocus = client.post("/api/session/refocus", json={"session_id": sid}).json()
        assert refocus["session"]["state"] == "active"

        clock.tick(1800)
        ended = client.post("/api/session/end", json={"session_id": sid}).json()["session"]
        assert ended["completed"] is True
        assert ended["concentration_breaks"] == 2
        assert ended["total_duration"] == 1800
        assert ended["efficiency"] == 90

        again = client.post("/api/session/end", json={"session_id": sid})
        assert again.status_code == 409
        assert again.json()["error"]["code"] == "INVALID_STATE"

    def test_camel_case_session_ids(self, client):
        started = client.post("/api/session/start", json={"userId": "user_camel"})
        assert started.status_code == 200
        sid = started.json()["session_id"]

        lapse = client.post("/api/session/break", json={"sessionId": sid})
        ended = client.post("/api/session/end", json={"sessionId": sid})

        assert lapse.json()["session"]["concentration_breaks"] == 1
        assert ended.json()["session"]["completed"] is True
        assert ended.json()["session"]["user_id"] == "user_camel"

    def test_refocus_while_active_conflicts(self, client):
        sid = client.post("/api/session/start", json={"user_id": "user_x"}).json()["session_id"]
        response = client.post("/api/session/refocus", json={"session_id": sid})
        assert response.status_code == 409

    def test_unknown_session(self, client):
        response = client.post("/api/session/break", json={"session_id": "session_nope"})
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_history_and_stats(self, client, clock):
        assert client.get("/api/stats/user_s").json() == {"success": True, "stats": None}

        for _ in range(2):
            sid = client.post("/api/session/start", json={"user_id": "user_s"}).json()["session_id"]
            client.post("/api/session/break", json={"session_id": sid})
            clock.tick(900)
            client.post("/api/session/end", json={"session_id": sid})

        sessions = client.get("/api/sessions/user_s").json()["sessions"]
        stats = client.get("/api/stats/user_s").json()["stats"]

        assert len(sessions) == 2
        assert stats == {
            "total_sessions": 2,
            "average_duration_minutes": 15,
            "average_breaks": 1.0,
            "average_efficiency": 90,
            "total_focus_time_minutes": 30,
        }
