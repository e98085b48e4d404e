"""Tests for the toast websocket registry."""

from __future__ import annotations

import asyncio

from app.infrastructure.notifications import NotificationConnectionManager


class FakeWebSocket:
    def __init__(self, *, broken: bool = False) -> None:
        self.accepted = False
        self.broken = broken
        self.messages: list[dict] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message: dict) -> None:
        if self.broken:
            raise RuntimeError("socket closed")
        self.messages.append(message)


def test_send_reaches_every_socket_and_prunes_broken_ones():
    manager = NotificationConnectionManager()
    phone, laptop, dead = FakeWebSocket(), FakeWebSocket(), FakeWebSocket(broken=True)

    async def run() -> int:
        for websocket in (phone, laptop, dead):
            await manager.connect("alice", websocket)
        return await manager.send_to_user("alice", {"type": "notification"})

    assert asyncio.run(run()) == 2
    assert phone.accepted and phone.messages == [{"type": "notification"}]
    assert laptop.messages == [{"type": "notification"}]
    assert manager.connection_count("alice") == 2


def test_disconnect_forgets_user_once_last_socket_closes():
    manager = NotificationConnectionManager()
    websocket = FakeWebSocket()

    asyncio.run(manager.connect("bob", websocket))
    manager.disconnect("bob", websocket)
    manager.disconnect("bob", websocket)

    assert manager.has_connections("bob") is False
    assert asyncio.run(manager.send_to_user("bob", {"type": "notification"})) == 0
