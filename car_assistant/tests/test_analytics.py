from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from car_assistant.analytics.aggregator import compute_session_analytics
from car_assistant.app import app
from car_assistant.sessions.models import Session, SessionUpdate
from car_assistant.sessions.store import InMemorySessionStore, set_session_store
from car_assistant.sessions.tracker import create_or_get_session, update_session

client = TestClient(app)


def _login_admin(c):
    c.post("/auth/login", json={"username": "admin", "password": "admin123"})


@pytest.fixture
def store():
    store = InMemorySessionStore()
    set_session_store(store)
    yield store
    set_session_store(None)


def _walk(store, *updates: tuple[SessionUpdate | None, str, str]) -> Session:
    session, _ = create_or_get_session(None, store=store)
    for changes, step, action in updates:
        session = update_session(session.id, changes, step, action, store=store)
    return session


# ── Aggregation ──────────────────────────────────────────────────────────


def test_empty_analytics():
    body = compute_session_analytics([])
    assert body["total_sessions"] == 0
    assert body["completed_sessions"] == 0
    assert body["completion_rate"] == 0.0
    assert body["avg_steps_per_session"] == 0.0
    assert body["top_usage_tags"] == []


def test_completion_rate_and_step_average(store):
    _walk(
        store,
        (SessionUpdate(usage_tags=["City driving", "Mixed"]), "usage", "select"),
        (SessionUpdate(body_type="SUV"), "body", "select"),
        (SessionUpdate(selected_car_id="c04"), "result", "complete"),
    )
    _walk(store, (SessionUpdate(usage_tags=["City driving"]), "usage", "select"))
    _walk(store)

    body = compute_session_analytics(store.list_sessions())
    assert body["total_sessions"] == 3
    assert body["completed_sessions"] == 1
    assert body["completion_rate"] == pytest.approx(33.3)
    assert body["avg_steps_per_session"] == pytest.approx(1.3)
    assert body["action_counts"] == {"select": 3, "complete": 1}
    assert body["step_counts"] == {"usage": 2, "body": 1, "result": 1}
    assert body["top_usage_tags"][0] == {"name": "City driving", "count": 2}
    assert body["top_body_types"] == [{"name": "SUV", "count": 1}]
    assert body["top_selected_cars"] == [{"name": "c04", "count": 1}]


def test_missing_step_and_action_count_as_unknown(store):
    _walk(store, (None, None, None))
    body = compute_session_analytics(store.list_sessions())
    assert body["action_counts"] == {"unknown": 1}
    assert body["step_counts"] == {"unknown": 1}


def test_top_lists_are_capped_at_ten():
    sessions = [
        Session(
            id=str(i),
            fuel_type=f"fuel-{i}",
            created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        )
        for i in range(15)
    ]
    assert len(compute_session_analytics(sessions)["top_fuel_types"]) == 10


# ── Endpoint ─────────────────────────────────────────────────────────────


def test_analytics_endpoint_reports_store_contents(store):
    _walk(store, (SessionUpdate(fuel_type="Hybrid"), "fuel", "select"))
    _login_admin(client)
    resp = client.get("/analytics")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_sessions"] == 1
    assert body["top_fuel_types"] == [{"name": "Hybrid", "count": 1}]


def test_analytics_endpoint_counts_api_sessions(store):
    c = TestClient(app)
    session_id = c.post("/assistant/session", json={}).json()["session"]["id"]
    c.put(
        "/assistant/session",
        json={"session_id": session_id, "priority_tags": ["Safety"], "step": "priorities", "action": "select"},
    )
    _login_admin(c)
    body = c.get("/analytics").json()
    assert body["top_priority_tags"] == [{"name": "Safety", "count": 1}]
    assert body["step_counts"] == {"priorities": 1}
