"""
Realtime websocket endpoint.

    ws://host/ws?token=<jwt>

A connection joins the channel of the user named by its token and receives
``{"event": "notification", ...}`` and ``{"event": "view_update", ...}``
payloads. Client frames are only read to notice disconnects; ``"ping"`` is
answered with ``{"event": "pong"}``.
"""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from zfounders.domain.exceptions import UnauthorizedError
from zfounders.infrastructure.realtime import ConnectionRegistry
from zfounders.presentation.dependencies import decode_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def realtime_socket(websocket: WebSocket):
    token = websocket.query_params.get("token")
    config = websocket.app.state.config
    try:
        if not token:
            raise UnauthorizedError("Authentication required")
        user_id = decode_token(token, config)
    except UnauthorizedError as exc:
        logger.info("[Realtime] rejected connection: %s", exc.message)
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    registry = await websocket.app.state.dishka_container.get(ConnectionRegistry)
    await websocket.accept()
    await registry.connect(user_id.value, websocket)
    try:
        while True:
            text = await websocket.receive_text()
            if text == "ping":
                await websocket.send_json({"event": "pong"})
    except WebSocketDisconnect:
        pass
    finally:
        await registry.disconnect(user_id.value, websocket)
