"""WebSocket handler for live play: held keys in, frames out."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from grid_snake.server.models import SessionStatus
from grid_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Receive ``{"pressed": [...]}`` messages; stream state every frame."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None or session.status != SessionStatus.ACTIVE:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    logger.info("Client connected to session %s.", session_id)

    # Initial snapshot so the client can draw before the first frame.
    async with session.lock:
        snapshot = session.snapshot()
    await websocket.send_text(json.dumps(snapshot, separators=(",", ":")))

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            pressed = msg.get("pressed")
            if not isinstance(pressed, list):
                continue
            keys = [key for key in pressed if isinstance(key, str)]

            async with session.lock:
                session.set_pressed(keys)
    except WebSocketDisconnect:
        logger.info("Client disconnected from session %s.", session_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
