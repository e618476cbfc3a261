"""REST API route handlers for game lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from snake_astar.server.models import (
    CreateGameRequest,
    ErrorResponse,
    GameSummary,
)

router = APIRouter(prefix="/games", tags=["games"])

_NOT_FOUND = {404: {"model": ErrorResponse}}


def _get_manager(request: Request):
    return request.app.state.game_manager


@router.post("", status_code=201, responses={422: {"model": ErrorResponse}})
async def create_game(body: CreateGameRequest, request: Request) -> GameSummary:
    """Create a game of the requested variant and start ticking it."""
    manager = _get_manager(request)
    try:
        game = manager.create_game(
            variant=body.variant,
            rows=body.rows,
            cols=body.cols,
            tick_rate_ms=body.tick_rate_ms,
            block_reversal=body.block_reversal,
            seed=body.seed,
        )
    except KeyError as exc:
        raise HTTPException(status_code=422, detail=exc.args[0]) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return game.summary()


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    """List running games."""
    return _get_manager(request).list_games()


@router.get("/{game_id}", responses=_NOT_FOUND)
async def get_game(game_id: str, request: Request) -> dict:
    """Get game metadata and the current state."""
    game = _get_manager(request).get_game(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    async with game.lock:
        state = game.session.get_state()
    return {**game.summary().model_dump(mode="json"), "state": state}


@router.delete("/{game_id}", status_code=204, responses=_NOT_FOUND)
async def delete_game(game_id: str, request: Request) -> Response:
    """Stop a game and discard it."""
    try:
        await _get_manager(request).remove_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found.") from exc
    return Response(status_code=204)
