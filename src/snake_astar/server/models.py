"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class GameStatus(str, enum.Enum):
    """Lifecycle states for a game instance."""

    ACTIVE = "active"
    FINISHED = "finished"


class CreateGameRequest(BaseModel):
    """Request body for POST /games."""

    variant: str = "solo"
    rows: int | None = Field(default=None, ge=1, le=200)
    cols: int | None = Field(default=None, ge=1, le=200)
    tick_rate_ms: int | None = Field(default=None, ge=50, le=2000)
    block_reversal: bool = False
    seed: int | None = None


class GameSummary(BaseModel):
    """Compact game info for list endpoints."""

    game_id: str
    variant: str
    status: GameStatus
    rows: int
    cols: int
    tick_rate_ms: int
    human_slots: list[int]


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
