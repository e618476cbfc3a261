"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from snake_astar.server.game_manager import GameInstance, GameManager
from snake_astar.server.models import GameStatus
from snake_astar.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()

_DIRECTION_MAP: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def _get_manager(ws: WebSocket) -> GameManager:
    return ws.app.state.game_manager


def _apply_message(game: GameInstance, msg: dict) -> None:
    """Route a client message to the session; malformed input is ignored."""
    key = msg.get("key")
    if isinstance(key, str):
        game.session.press_key(key)
        return

    direction_str = msg.get("direction")
    slot = msg.get("slot", 0)
    if not isinstance(direction_str, str) or not isinstance(slot, int):
        return
    direction = _DIRECTION_MAP.get(direction_str.lower())
    if direction is None:
        return
    try:
        game.session.set_heading(slot, direction)
    except ValueError as exc:
        logger.debug("Ignored heading for game %s: %s", game.game_id, exc)


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str) -> None:
    """Send key presses or headings, receive game state each tick."""
    game = _get_manager(websocket).get_game(game_id)
    if game is None:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    game.sockets.append(websocket)
    logger.info("Client connected to game %s.", game_id)

    # Send initial state snapshot so the client can render immediately.
    async with game.lock:
        state = game.session.get_state()
        finished = game.status == GameStatus.FINISHED
    await websocket.send_text(json.dumps(state, separators=(",", ":")))
    if finished:
        if websocket in game.sockets:
            game.sockets.remove(websocket)
        if websocket.application_state == WebSocketState.CONNECTED:
            await websocket.close(code=1000, reason="Game finished.")
        return

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            async with game.lock:
                if game.status == GameStatus.ACTIVE:
                    _apply_message(game, msg)
    except WebSocketDisconnect:
        logger.info("Client disconnected from game %s.", game_id)
    finally:
        if websocket in game.sockets:
            game.sockets.remove(websocket)
