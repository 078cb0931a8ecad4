"""
LetsGuess API и WebSocket.
"""
import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from . import __version__, ws_handlers
from .config import get_config
from .sessions import generate_game_id

config = get_config()

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="LetsGuess API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {
        "status": "ok",
        "games": ws_handlers.coordinator.store.count(),
        **ws_handlers.coordinator.connections.stats(),
    }


@app.get("/api/games/new")
def new_game():
    return {"gameId": generate_game_id()}


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    logger.info("WS: connection attempt from %s", ws.client)
    await ws_handlers.ws_loop(ws)


@app.websocket("/ws/{game_id}")
async def websocket_game_endpoint(ws: WebSocket, game_id: str):
    logger.info("WS: connection attempt from %s for game %r", ws.client, game_id)
    await ws_handlers.ws_loop(ws, default_game_id=game_id)


# Статика фронтенда (для разработки)
frontend_path = Path(__file__).resolve().parent.parent.parent / "frontend"
if frontend_path.is_dir():
    app.mount("/", StaticFiles(directory=str(frontend_path), html=True), name="frontend")


def run() -> None:
    uvicorn.run("letsguess.main:app", host=config.host, port=config.port, log_level=config.log_level.lower())
