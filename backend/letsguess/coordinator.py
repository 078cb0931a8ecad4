"""
Координатор партий: связывает хранилище, логику игры и рассылку.
Каждая мутация партии и рассылка её результата выполняются под замком
этой партии, поэтому все участники видят события в одном порядке.
"""
import logging

from . import game
from .articles import WikipediaArticleProvider
from .game import GameEvent
from .protocol import (
    article_init_payload,
    article_update_payload,
    clean_player_name,
    game_over_payload,
)
from .sessions import GameSession, Participant, SessionStore, generate_game_id, normalize_game_id
from .ws_manager import GameConnection, WSManager, manager

logger = logging.getLogger(__name__)


class GameCoordinator:
    def __init__(self, store: SessionStore, connections: WSManager):
        self.store = store
        self.connections = connections

    async def join(self, conn: GameConnection, game_id: str | None, name: str | None) -> Participant:
        """Войти в партию (создав её при необходимости); article_init уходит только этому соединению."""
        game_id = normalize_game_id(game_id) or generate_game_id()
        session = await self.store.resolve_or_create(game_id)
        async with self.store.lock(game_id):
            color = session.assign_color()
            participant = self.connections.bind(conn, game_id, clean_player_name(name), color)
            await self.connections.send_to(conn, article_init_payload(session))
        logger.info(
            "WS: %s joined game %r as %r (%s)",
            conn.connection_id, game_id, participant.player_name, color,
        )
        return participant

    async def guess(self, conn: GameConnection, word: str | None) -> GameEvent:
        participant, session = self._resolve(conn)
        if session is None:
            return GameEvent.IGNORED
        async with self.store.lock(session.id):
            event = game.submit_guess(session, participant, word)
            await self._publish(session, event)
        return event

    async def give_up(self, conn: GameConnection) -> GameEvent:
        _, session = self._resolve(conn)
        if session is None:
            return GameEvent.IGNORED
        async with self.store.lock(session.id):
            event = game.give_up(session)
            await self._publish(session, event)
        return event

    def disconnect(self, conn: GameConnection) -> None:
        self.connections.unbind(conn.connection_id)

    def _resolve(self, conn: GameConnection) -> tuple[Participant | None, GameSession | None]:
        participant = self.connections.lookup(conn.connection_id)
        if participant is None:
            return None, None
        return participant, self.store.get(participant.session_id)

    async def _publish(self, session: GameSession, event: GameEvent) -> None:
        if event is GameEvent.UPDATED:
            await self.connections.broadcast_to_session(session.id, article_update_payload(session))
        elif event in (GameEvent.WON, GameEvent.REVEALED):
            await self.connections.broadcast_to_session(session.id, game_over_payload(session))


coordinator = GameCoordinator(SessionStore(WikipediaArticleProvider()), manager)
