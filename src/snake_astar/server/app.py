"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_astar.config import VARIANT_NAMES, get_variant
from snake_astar.server.game_manager import GameManager
from snake_astar.server.routes import router
from snake_astar.server.websocket import ws_router


@asynccontextmanager
async def _lifespan(app: FastAPI):
    app.state.game_manager = GameManager()
    yield
    await app.state.game_manager.cleanup()


def create_app() -> FastAPI:
    """Build the app: game lifecycle routes, live play socket, presets."""
    app = FastAPI(
        title="Snake A* API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)

    @app.get("/variants", tags=["variants"])
    async def list_variants() -> list[dict]:
        """Default configuration of every playable variant."""
        return [get_variant(name).to_dict() for name in VARIANT_NAMES]

    return app
