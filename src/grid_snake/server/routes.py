"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from grid_snake.server.models import CreateSessionRequest, SessionSummary

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request):
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a session and start simulating immediately."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            arena_width=body.arena_width,
            arena_height=body.arena_height,
            move_interval_ms=body.move_interval_ms,
            food_interval_ms=body.food_interval_ms,
            frame_ms=body.frame_ms,
            seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List active sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Session metadata plus the current simulation state."""
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    async with session.lock:
        state = session.snapshot()
    return {
        **session.summary().model_dump(mode="json"),
        "config": session.config.to_dict(),
        "state": state,
    }


@router.delete("/{session_id}", status_code=200)
async def close_session(session_id: str, request: Request) -> dict:
    """Stop a session and discard it."""
    try:
        await _get_manager(request).close_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"status": "closed", "session_id": session_id}
