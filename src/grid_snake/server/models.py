"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a simulation session."""

    ACTIVE = "active"
    FINISHED = "finished"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    arena_width: int = Field(default=40, ge=4, le=200)
    arena_height: int = Field(default=40, ge=4, le=200)
    move_interval_ms: int = Field(default=150, ge=10, le=5000)
    food_interval_ms: int = Field(default=1000, ge=10, le=60000)
    frame_ms: int = Field(default=16, ge=5, le=1000)
    seed: int | None = None


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    arena_width: int
    arena_height: int
    frame_ms: int
    connected: int
