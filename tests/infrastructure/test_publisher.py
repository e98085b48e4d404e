"""Tests for the realtime toast publisher."""

from __future__ import annotations

import asyncio

from app.infrastructure.notifications import NotificationPublisher, serialize_notification


class FakeManager:
    def __init__(self, connected: set[str]) -> None:
        self.connected = connected
        self.sent: list[tuple[str, dict]] = []

    def has_connections(self, user_id: str) -> bool:
        return user_id in self.connected

    async def send_to_user(self, user_id: str, message: dict) -> None:
        self.sent.append((user_id, message))


def test_dispatch_pushes_toast_to_connected_owner(make_notification):
    manager = FakeManager({"alice"})
    publisher = NotificationPublisher(manager)
    notification = make_notification(display_location="toast")

    async def run() -> bool:
        queued = publisher.dispatch(notification)
        await asyncio.sleep(0)
        return queued

    assert asyncio.run(run()) is True
    assert manager.sent == [
        ("alice", {"type": "notification", "data": serialize_notification(notification)})
    ]


def test_dispatch_skips_panel_only_notifications(make_notification):
    manager = FakeManager({"alice"})

    queued = NotificationPublisher(manager).dispatch(make_notification())

    assert queued is False
    assert manager.sent == []


def test_dispatch_skips_owner_without_sockets(make_notification):
    manager = FakeManager(set())

    queued = NotificationPublisher(manager).dispatch(make_notification(display_location="both"))

    assert queued is False


def test_dispatch_outside_worker_thread_is_reported(make_notification, caplog):
    manager = FakeManager({"alice"})

    with caplog.at_level("WARNING"):
        queued = NotificationPublisher(manager).dispatch(
            make_notification(display_location="toast")
        )

    assert queued is False
    assert "No event loop available" in caplog.text


def test_serialize_notification_includes_priority_and_metadata(make_notification, now):
    payload = serialize_notification(
        make_notification(created_at=now, metadata={"counterparty_id": "bob", "role": "sender"})
    )

    assert payload["priority"] == {"base": "medium", "calculated_priority": 45}
    assert payload["metadata"]["counterparty_id"] == "bob"
    assert payload["created_at"] == now.isoformat()
    assert payload["updated_at"] is None


class BrokenManager(FakeManager):
    async def send_to_user(self, user_id: str, message: dict) -> None:
        raise RuntimeError("socket closed")


def test_scheduled_push_is_tracked_until_it_finishes(make_notification):
    publisher = NotificationPublisher(FakeManager({"alice"}))

    async def run() -> tuple[int, int]:
        publisher.dispatch(make_notification(display_location="toast"))
        scheduled = len(publisher._pending)
        await asyncio.wait(set(publisher._pending))
        return scheduled, len(publisher._pending)

    assert asyncio.run(run()) == (1, 0)


def test_failed_push_is_logged(make_notification, caplog):
    publisher = NotificationPublisher(BrokenManager({"alice"}))

    async def run() -> None:
        publisher.dispatch(make_notification(display_location="toast"))
        await asyncio.wait(set(publisher._pending))

    with caplog.at_level("WARNING"):
        asyncio.run(run())

    assert "Toast push failed: socket closed" in caplog.text
    assert publisher._pending == set()
