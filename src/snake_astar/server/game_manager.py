"""In-memory game registry, lifecycle management, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from snake_astar.config import get_variant
from snake_astar.server.models import GameStatus, GameSummary
from snake_astar.session import GameSession

logger = logging.getLogger(__name__)

_MAX_FINISHED_GAMES = 100


@dataclass
class GameInstance:
    """A session plus the connections and task that drive it."""

    game_id: str
    session: GameSession
    status: GameStatus = GameStatus.ACTIVE
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def tick_rate_ms(self) -> int:
        return self.session.config.tick_rate_ms

    def summary(self) -> GameSummary:
        cfg = self.session.config
        return GameSummary(
            game_id=self.game_id,
            variant=cfg.name,
            status=self.status,
            rows=cfg.rows,
            cols=cfg.cols,
            tick_rate_ms=cfg.tick_rate_ms,
            human_slots=cfg.human_slots(),
        )


class GameManager:
    """Central registry managing all game instances.

    Every game is isolated: it owns its session, lock and tick loop.
    """

    def __init__(self, max_finished_games: int = _MAX_FINISHED_GAMES) -> None:
        if max_finished_games < 0:
            raise ValueError("max_finished_games must be >= 0.")
        self._games: dict[str, GameInstance] = {}
        self._max_finished_games = max_finished_games

    def create_game(
        self,
        variant: str = "solo",
        rows: int | None = None,
        cols: int | None = None,
        tick_rate_ms: int | None = None,
        block_reversal: bool = False,
        seed: int | None = None,
    ) -> GameInstance:
        """Create a game and start its tick loop.

        Raises ``KeyError`` for an unknown variant and ``ValueError`` for an
        invalid configuration.
        """
        config = get_variant(
            variant,
            rows=rows,
            cols=cols,
            tick_rate_ms=tick_rate_ms,
            block_reversal=block_reversal,
            seed=seed,
        )
        game_id = uuid.uuid4().hex[:12]
        instance = GameInstance(game_id=game_id, session=GameSession(config))
        self._games[game_id] = instance
        instance._task = asyncio.create_task(self._tick_loop(instance))
        logger.info("Game %s created (variant=%s).", game_id, variant)
        return instance

    def get_game(self, game_id: str) -> GameInstance | None:
        return self._games.get(game_id)

    def list_games(self) -> list[GameSummary]:
        """Return summaries of non-finished games."""
        return [
            g.summary() for g in self._games.values()
            if g.status != GameStatus.FINISHED
        ]

    async def remove_game(self, game_id: str) -> None:
        """Stop a game's tick loop and forget it."""
        game = self._games.get(game_id)
        if game is None:
            raise KeyError(f"Game {game_id} not found.")
        task = game._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        self._mark_game_finished(game)
        await self._close_connections(game)
        self._games.pop(game_id, None)
        logger.info("Game %s removed.", game_id)

    async def _tick_loop(self, game: GameInstance) -> None:
        """Run the game tick loop, broadcasting state each tick."""
        tick_interval = game.tick_rate_ms / 1000.0
        try:
            while game.status == GameStatus.ACTIVE:
                await asyncio.sleep(tick_interval)
                async with game.lock:
                    state = game.session.tick_once()
                    if game.session.game_over:
                        self._mark_game_finished(game)
                await self._broadcast(game, state)
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for game %s.", game.game_id)
        except Exception:
            logger.exception("Tick loop error in game %s.", game.game_id)
            self._mark_game_finished(game)
        finally:
            if game.status == GameStatus.FINISHED:
                await self._close_connections(game)
                self._prune_finished_games()

    def _mark_game_finished(self, game: GameInstance) -> None:
        """Transition a game to finished exactly once."""
        if game.status != GameStatus.FINISHED:
            game.status = GameStatus.FINISHED
            game.finished_at = time.monotonic()

    async def _close_connections(self, game: GameInstance) -> None:
        """Close any live sockets of a finished game."""
        for ws in list(game.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Game finished.")
            except Exception:
                logger.warning("Failed closing socket in game %s.", game.game_id)
        game.sockets.clear()

    def _prune_finished_games(self) -> None:
        """Bound retained finished games to avoid unbounded registry growth."""
        finished_games = [
            g for g in self._games.values() if g.status == GameStatus.FINISHED
        ]
        overflow = len(finished_games) - self._max_finished_games
        if overflow <= 0:
            return

        finished_games.sort(
            key=lambda g: g.finished_at if g.finished_at is not None else g.created_at,
        )
        for stale in finished_games[:overflow]:
            self._games.pop(stale.game_id, None)
        logger.info(
            "Pruned %d finished games (retaining up to %d).",
            overflow,
            self._max_finished_games,
        )

    async def _broadcast(self, game: GameInstance, state: dict) -> None:
        """Send game state to every connected socket."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(game.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in game.sockets:
                game.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        tasks = [
            g._task for g in self._games.values()
            if g._task and not g._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("GameManager cleanup complete.")
