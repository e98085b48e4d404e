"""Integration tests for the notification API endpoints."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient


@pytest.fixture()
def client():
    """Return a test client bound to a clean application instance."""

    from app.infrastructure import database

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)

    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def _payload(**overrides):
    payload = {
        "user_id": "alice",
        "type": "payment_request",
        "title": "Payment request",
        "description": "Bob requests 150,000 sats",
        "priority": {
            "base": "high",
            "modifiers": {
                "action_required": True,
                "time_constraint": True,
                "amount": 150_000,
                "role": "recipient",
            },
        },
        "display_location": "both",
        "metadata": {
            "gradient": "from-amber-500 to-amber-600",
            "action_required": True,
            "dismissible": True,
            "visibility": "both",
            "role": "recipient",
            "counterparty_id": "bob",
            "payment_data": {
                "amount": 150_000,
                "currency": "sats",
                "type": "lightning",
                "status": "pending",
            },
        },
    }
    payload.update(overrides)
    return payload


def _headers(user_id: str) -> dict[str, str]:
    return {"X-User-Id": user_id}


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_create_and_read_pair(client: TestClient) -> None:
    response = client.post("/notifications/", json=_payload())
    assert response.status_code == 201
    created = response.json()
    assert created["status"] == "active"
    assert created["effective_status"] == "active"
    assert created["priority"]["calculated_priority"] == 100

    bob_view = client.get("/notifications/", headers=_headers("bob")).json()
    assert len(bob_view) == 1
    assert bob_view[0]["metadata"]["role"] == "sender"
    assert bob_view[0]["metadata"]["parent_notification_id"] == created["id"]
    assert bob_view[0]["priority"]["calculated_priority"] == 100

    fetched = client.get(f"/notifications/{created['id']}", headers=_headers("alice"))
    assert fetched.status_code == 200
    assert fetched.json()["id"] == created["id"]


def test_create_rejects_unknown_priority_base(client: TestClient) -> None:
    payload = _payload()
    payload["priority"]["base"] = "urgent"

    response = client.post("/notifications/", json=payload)

    assert response.status_code == 422


def test_list_requires_viewer_header(client: TestClient) -> None:
    assert client.get("/notifications/").status_code == 401


def test_dismiss_then_action_conflicts(client: TestClient) -> None:
    created = client.post("/notifications/", json=_payload()).json()
    notification_id = created["id"]

    dismissed = client.post(
        f"/notifications/{notification_id}/dismiss", headers=_headers("alice")
    )
    assert dismissed.status_code == 200
    assert dismissed.json()["status"] == "dismissed"

    conflict = client.post(
        f"/notifications/{notification_id}/action", headers=_headers("alice")
    )
    assert conflict.status_code == 409

    bob_view = client.get("/notifications/", headers=_headers("bob")).json()
    assert bob_view[0]["status"] == "dismissed"


def test_action_with_payment_status(client: TestClient) -> None:
    created = client.post("/notifications/", json=_payload()).json()

    response = client.post(
        f"/notifications/{created['id']}/action",
        headers=_headers("alice"),
        json={"payment_status": "completed"},
    )

    assert response.status_code == 200
    assert response.json()["metadata"]["payment_data"]["status"] == "completed"


def test_foreign_viewer_cannot_dismiss(client: TestClient) -> None:
    created = client.post("/notifications/", json=_payload()).json()

    response = client.post(
        f"/notifications/{created['id']}/dismiss", headers=_headers("mallory")
    )

    assert response.status_code == 404


def test_past_due_notification_reads_as_expired_until_swept(client: TestClient) -> None:
    past = (datetime.now(timezone.utc) - timedelta(minutes=5)).isoformat()
    payload = _payload()
    payload["metadata"]["expires_at"] = past
    created = client.post("/notifications/", json=payload).json()

    assert created["status"] == "active"
    assert created["effective_status"] == "expired"
    assert client.get("/notifications/count", headers=_headers("alice")).json() == {"active": 0}

    sweep = client.post("/notifications/expire-sweep")
    assert sweep.json() == {"expired": 2}

    stored = client.get(f"/notifications/{created['id']}", headers=_headers("alice")).json()
    assert stored["status"] == "expired"
    assert stored["metadata"]["payment_data"]["status"] == "expired"


def test_suggested_actions_and_mark_read(client: TestClient) -> None:
    first = client.post("/notifications/", json=_payload()).json()
    toast_only = client.post(
        "/notifications/", json=_payload(display_location="toast")
    ).json()

    suggested = client.get(
        "/notifications/suggested-actions", headers=_headers("alice")
    ).json()
    assert [n["id"] for n in suggested] == [first["id"]]

    response = client.post(
        "/notifications/read",
        headers=_headers("alice"),
        json={"ids": [first["id"], toast_only["id"], first["id"]]},
    )
    assert response.json() == {"dismissed_ids": [first["id"], toast_only["id"]]}


def test_cleanup_deletes_closed_notifications(client: TestClient) -> None:
    created = client.post("/notifications/", json=_payload(metadata={"visibility": "both"})).json()
    client.post(f"/notifications/{created['id']}/dismiss", headers=_headers("alice"))

    cutoff = (datetime.now(timezone.utc) + timedelta(days=1)).isoformat()
    response = client.delete(
        "/notifications/", params={"older_than": cutoff}, headers=_headers("alice")
    )

    assert response.json() == {"deleted": 1}
    missing = client.get(f"/notifications/{created['id']}", headers=_headers("alice"))
    assert missing.status_code == 404


def test_websocket_ping(client: TestClient) -> None:
    with client.websocket_connect("/notifications/ws?user_id=alice") as websocket:
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}
