"""
Менеджер WebSocket: привязка соединение -> участник партии и рассылка
событий всем соединениям одной партии.
"""
import logging
import uuid
from typing import Any, Protocol

from fastapi import WebSocket

from .sessions import Participant

logger = logging.getLogger(__name__)


class GameConnection(Protocol):
    connection_id: str

    async def send(self, payload: dict[str, Any]) -> None: ...


class Connection:
    def __init__(self, ws: WebSocket, connection_id: str | None = None):
        self.ws = ws
        self.connection_id = connection_id or uuid.uuid4().hex

    async def send(self, payload: dict[str, Any]) -> None:
        await self.ws.send_json(payload)


class WSManager:
    def __init__(self):
        self._connections: dict[str, GameConnection] = {}
        self._participants: dict[str, Participant] = {}
        # session_id -> connection_id в порядке входа (dict как упорядоченное множество)
        self._by_session: dict[str, dict[str, None]] = {}

    def bind(self, conn: GameConnection, session_id: str, name: str, color: str) -> Participant:
        """Привязать соединение к партии. Повторный join переносит привязку."""
        self.unbind(conn.connection_id)
        participant = Participant(
            connection_id=conn.connection_id,
            session_id=session_id,
            player_name=name,
            color=color,
        )
        self._connections[conn.connection_id] = conn
        self._participants[conn.connection_id] = participant
        self._by_session.setdefault(session_id, {})[conn.connection_id] = None
        return participant

    def lookup(self, connection_id: str) -> Participant | None:
        return self._participants.get(connection_id)

    def unbind(self, connection_id: str) -> Participant | None:
        participant = self._participants.pop(connection_id, None)
        self._connections.pop(connection_id, None)
        if participant:
            members = self._by_session.get(participant.session_id)
            if members is not None:
                members.pop(connection_id, None)
                if not members:
                    del self._by_session[participant.session_id]
        return participant

    def connections_for(self, session_id: str) -> list[GameConnection]:
        return [self._connections[cid] for cid in self._by_session.get(session_id, {})]

    def stats(self) -> dict[str, int]:
        return {"connections": len(self._participants), "active_games": len(self._by_session)}

    async def send_to(self, conn: GameConnection, payload: dict[str, Any]) -> bool:
        try:
            await conn.send(payload)
            return True
        except Exception as e:
            logger.warning("send_to %s: %s", conn.connection_id, e)
            self.unbind(conn.connection_id)
            return False

    async def broadcast_to_session(self, session_id: str, payload: dict[str, Any]) -> int:
        dead = []
        sent = 0
        for conn in self.connections_for(session_id):
            try:
                await conn.send(payload)
                sent += 1
            except Exception as e:
                logger.warning("broadcast to %s failed: %s", conn.connection_id, e)
                dead.append(conn)
        for conn in dead:
            self.unbind(conn.connection_id)
        return sent


manager = WSManager()
