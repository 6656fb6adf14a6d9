"""In-memory session registry and wall-clock frame loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from grid_snake.config import GameConfig
from grid_snake.engine import GameEngine
from grid_snake.render import RenderAdapter
from grid_snake.server.models import SessionStatus, SessionSummary
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

_MAX_SESSIONS = 32


@dataclass
class Session:
    """One running simulation and the sockets watching it."""

    session_id: str
    config: GameConfig
    frame_ms: int
    engine: GameEngine
    renderer: RenderAdapter
    status: SessionStatus = SessionStatus.ACTIVE
    pressed: set[Direction] = field(default_factory=set)
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def set_pressed(self, keys: list[str]) -> None:
        """Replace the held keys; unknown key names are ignored."""
        pressed: set[Direction] = set()
        for key in keys:
            direction = Direction.from_key(key)
            if direction is not None:
                pressed.add(direction)
        self.pressed = pressed

    def advance(self, elapsed: float) -> dict:
        """Step the engine and return the broadcast payload."""
        self.engine.step(self.pressed, elapsed)
        return self.snapshot()

    def snapshot(self) -> dict:
        state = self.engine.get_state()
        state["session_id"] = self.session_id
        state["sprites"] = [
            sprite.to_dict() for sprite in self.renderer.frame(self.engine.world)
        ]
        return state

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            status=self.status,
            arena_width=self.config.arena_width,
            arena_height=self.config.arena_height,
            frame_ms=self.frame_ms,
            connected=len(self.sockets),
        )


class SessionManager:
    """Central registry managing all simulation sessions."""

    def __init__(self, max_sessions: int = _MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        self._sessions: dict[str, Session] = {}
        self._max_sessions = max_sessions

    def create_session(
        self,
        arena_width: int = 40,
        arena_height: int = 40,
        move_interval_ms: int = 150,
        food_interval_ms: int = 1000,
        frame_ms: int = 16,
        seed: int | None = None,
    ) -> Session:
        """Create a session and start its frame loop."""
        active = [
            s for s in self._sessions.values()
            if s.status == SessionStatus.ACTIVE
        ]
        if len(active) >= self._max_sessions:
            raise ValueError("Session limit reached. Close a session first.")

        centre_x, centre_y = arena_width // 2, arena_height // 2
        config = GameConfig(
            arena_width=arena_width,
            arena_height=arena_height,
            head_start=(centre_x, centre_y),
            segment_start=(centre_x, centre_y - 1),
            move_interval_ms=move_interval_ms,
            food_interval_ms=food_interval_ms,
            seed=seed,
        )
        session = Session(
            session_id=uuid.uuid4().hex[:12],
            config=config,
            frame_ms=frame_ms,
            engine=GameEngine(config),
            renderer=RenderAdapter.from_config(config),
        )
        self._sessions[session.session_id] = session
        session._task = asyncio.create_task(self._frame_loop(session))
        logger.info(
            "Session %s started (arena %dx%d, frame %d ms).",
            session.session_id, arena_width, arena_height, frame_ms,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of active sessions."""
        return [
            s.summary() for s in self._sessions.values()
            if s.status == SessionStatus.ACTIVE
        ]

    async def close_session(self, session_id: str) -> None:
        """Stop a session's frame loop and drop it from the registry."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        session.status = SessionStatus.FINISHED
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        await self._close_connections(session)
        logger.info("Session %s closed.", session_id)

    async def _frame_loop(self, session: Session) -> None:
        """Step the engine on wall-clock time and broadcast every frame."""
        frame_interval = session.frame_ms / 1000.0
        last = time.monotonic()
        try:
            while session.status == SessionStatus.ACTIVE:
                await asyncio.sleep(frame_interval)
                now = time.monotonic()
                elapsed, last = now - last, now
                async with session.lock:
                    payload = session.advance(elapsed)
                await self._broadcast(session, payload)
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Frame loop error in session %s.", session.session_id)
            session.status = SessionStatus.FINISHED
            self._sessions.pop(session.session_id, None)
            await self._close_connections(session)

    async def _close_connections(self, session: Session) -> None:
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session finished.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.sockets.clear()

    async def _broadcast(self, session: Session, payload: dict) -> None:
        """Send a frame to every connected socket, dropping dead ones."""
        text = json.dumps(payload, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(text)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel every running frame loop."""
        for session in self._sessions.values():
            session.status = SessionStatus.FINISHED
            if session._task and not session._task.done():
                session._task.cancel()
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
