"""Registry of the websockets that receive toast notifications."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Track open toast sockets per wallet user and fan messages out to them."""

    def __init__(self) -> None:
        self._connections: DefaultDict[str, Set[WebSocket]] = defaultdict(set)

    async def connect(self, user_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections[user_id].add(websocket)
        logger.debug(
            "Toast socket opened for %s (%s open)", user_id, self.connection_count(user_id)
        )

    def disconnect(self, user_id: str, websocket: WebSocket) -> None:
        sockets = self._connections.get(user_id)
        if sockets is None:
            return
        sockets.discard(websocket)
        if not sockets:
            del self._connections[user_id]

    def connection_count(self, user_id: str) -> int:
        return len(self._connections.get(user_id, ()))

    def has_connections(self, user_id: str) -> bool:
        return self.connection_count(user_id) > 0

    async def send_to_user(self, user_id: str, message: dict[str, Any]) -> int:
        """Send ``message`` to every socket of ``user_id``; return how many received it.

        Sockets that fail to send are treated as closed and pruned.
        """

        delivered = 0
        stale: list[WebSocket] = []
        for websocket in list(self._connections.get(user_id, ())):
            try:
                await websocket.send_json(message)
            except Exception as exc:  # pragma: no cover - peer went away mid-send
                logger.warning("Dropping toast socket for %s: %s", user_id, exc)
                stale.append(websocket)
            else:
                delivered += 1
        for websocket in stale:
            self.disconnect(user_id, websocket)
        return delivered


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
