"""
Connection Registry - live websocket connections keyed by user id.

One registry is constructed per process and injected (APP scope). It is the
in-process RealtimePublisher; with the Redis backend it is the local
delivery target for events relayed from the shared channel.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Any

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from zfounders.domain.ports.realtime import RealtimePublisher
from zfounders.observability.metrics import realtime_connected, realtime_disconnected

logger = logging.getLogger(__name__)


class ConnectionRegistry(RealtimePublisher):
    def __init__(self):
        self._connections: dict[str, set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def connect(self, user_id: str, websocket: WebSocket) -> None:
        async with self._lock:
            self._connections[user_id].add(websocket)
        realtime_connected()
        logger.info("[Realtime] %s connected", user_id)

    async def disconnect(self, user_id: str, websocket: WebSocket) -> None:
        async with self._lock:
            sockets = self._connections.get(user_id)
            if not sockets or websocket not in sockets:
                return
            sockets.discard(websocket)
            if not sockets:
                del self._connections[user_id]
        realtime_disconnected()
        logger.info("[Realtime] %s disconnected", user_id)

    def connection_count(self, user_id: str) -> int:
        return len(self._connections.get(user_id, ()))

    async def publish(self, user_id: str, event: dict[str, Any]) -> None:
        await self.deliver_local(user_id, event)

    async def deliver_local(self, user_id: str, event: dict[str, Any]) -> int:
        """Send ``event`` to every socket this process holds for ``user_id``."""
        async with self._lock:
            sockets = list(self._connections.get(user_id, ()))
        delivered = 0
        for websocket in sockets:
            if websocket.application_state != WebSocketState.CONNECTED:
                await self.disconnect(user_id, websocket)
                continue
            try:
                await websocket.send_json(event)
                delivered += 1
            except (RuntimeError, ConnectionError) as exc:
                logger.warning("[Realtime] dropping socket for %s: %s", user_id, exc)
                await self.disconnect(user_id, websocket)
        return delivered
