"""
Обработка сообщений WebSocket: join_game, submit_guess, give_up.
Битые и неизвестные сообщения отбрасываются, соединение остаётся открытым.
"""
import logging

from fastapi import WebSocket
from pydantic import ValidationError
from starlette.websockets import WebSocketDisconnect

from .coordinator import coordinator
from .protocol import GiveUp, JoinGame, SubmitGuess, parse_message
from .ws_manager import Connection

logger = logging.getLogger(__name__)


async def handle_ws_message(conn: Connection, raw: str | bytes, default_game_id: str | None = None) -> bool:
    """
    Обрабатывает одно сообщение клиента.
    Возвращает False если соединение нужно закрыть.
    """
    try:
        msg = parse_message(raw)
    except ValidationError as e:
        logger.warning("WS: dropped malformed message from %s: %s", conn.connection_id, e.errors()[0]["msg"])
        return True
    logger.info("WS: msg from %s type=%s", conn.connection_id, msg.type)
    if isinstance(msg, JoinGame):
        await coordinator.join(conn, msg.game_id or default_game_id, msg.name)
        return True
    if isinstance(msg, SubmitGuess):
        await coordinator.guess(conn, msg.word)
        return True
    if isinstance(msg, GiveUp):
        await coordinator.give_up(conn)
        return True
    return True


async def ws_loop(ws: WebSocket, default_game_id: str | None = None) -> None:
    """Цикл приёма сообщений одного клиента до отключения."""
    conn = Connection(ws)
    try:
        await ws.accept()
        logger.info("WS: accepted %s", conn.connection_id)
        while True:
            message = await ws.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            if not await handle_ws_message(conn, raw, default_game_id):
                break
    except WebSocketDisconnect as e:
        logger.info("WS: client disconnected code=%s reason=%s conn=%s", e.code, e.reason or "", conn.connection_id)
    except Exception as e:
        logger.exception("WS: error conn=%s: %s", conn.connection_id, e)
    finally:
        coordinator.disconnect(conn)
        logger.info("WS: disconnected conn=%s", conn.connection_id)
