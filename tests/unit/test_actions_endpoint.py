from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import foh.api.routes.actions as actions_route
from foh.api.main import app
from foh.application.ports.publisher import NullEventPublisher
from foh.application.use_cases.context import TraceContext
from foh.application.use_cases.dispatcher import ActionDispatcher
from foh.domain.records.entities import INVENTORY_HEADERS, INVENTORY_TABLE
from foh.infrastructure.store.memory_store import InMemoryTabularStore

NOW = datetime(2026, 10, 20, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def store(monkeypatch) -> InMemoryTabularStore:
    store = InMemoryTabularStore()
    monkeypatch.setattr(
        actions_route,
        "_dispatcher",
        lambda: ActionDispatcher(
            store=store,
            publisher=NullEventPublisher(),
            trace_ctx=TraceContext(trace_id=None, request_id=None),
            clock=lambda: NOW,
        ),
    )
    return store


def test_plain_json_response(store) -> None:
    client = TestClient(app)
    response = client.get("/exec", params={"action": "addShoutout", "staff": "Jo"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"success": True, "message": "Shoutout saved!"}


def test_jsonp_response_wraps_envelope(store) -> None:
    store.add_table(
        INVENTORY_TABLE,
        [list(INVENTORY_HEADERS), ["Crawfish", "Available", "8.99/lb", "today"], ["", "", "", ""]],
    )
    client = TestClient(app)
    response = client.get("/", params={"action": "getInventory", "callback": "board.render"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/javascript")
    body = response.text
    assert body.startswith("board.render(") and body.endswith(");")
    payload = json.loads(body[len("board.render(") : -2])
    assert payload == {
        "success": True,
        "data": [
            {
                "item": "Crawfish",
                "status": "Available",
                "price": "8.99/lb",
                "lastUpdated": "today",
            }
        ],
    }


def test_failures_still_answer_200(store) -> None:
    client = TestClient(app)
    response = client.get("/exec", params={"action": "nope"})

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Unknown action: nope"}


def test_unsafe_callback_falls_back_to_json(store) -> None:
    client = TestClient(app)
    response = client.get(
        "/exec", params={"action": "getDashboardStats", "callback": "alert(1)//"}
    )

    assert response.headers["content-type"].startswith("application/json")
    assert response.json()["success"] is True


def test_first_repeated_param_wins(store) -> None:
    client = TestClient(app)
    response = client.get("/exec?action=addShoutout&action=getShoutouts&staff=Jo")
    assert response.json() == {"success": True, "message": "Shoutout saved!"}


def test_request_id_is_echoed_from_query(store) -> None:
    client = TestClient(app)
    response = client.get("/exec", params={"action": "getVIPs", "requestId": "board-42"})
    assert response.headers["X-Request-Id"] == "board-42"
    assert response.json() == {"success": True, "data": []}


def test_dispatcher_setup_failure_is_an_envelope(monkeypatch) -> None:
    def broken():
        raise RuntimeError("STORE_BACKEND must be one of ['memory', 'sql'], got 'csv'")

    monkeypatch.setattr(actions_route, "_dispatcher", broken)
    client = TestClient(app)
    response = client.get("/exec", params={"action": "getWaitlist", "callback": "cb"})

    assert response.status_code == 200
    assert response.text.startswith("cb(")
    assert '"success":false' in response.text
