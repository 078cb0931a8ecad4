"""
Партии в памяти процесса: модель состояния и хранилище по game_id.
Партия создаётся лениво при первом входе и ровно один раз, даже если
несколько игроков входят одновременно (single-flight через pending-future).
"""
import asyncio
import logging
import secrets
from dataclasses import dataclass, field

from .articles import Article, ArticleProvider, is_word
from .constants import COLORS, GAME_ID_ALPHABET, GAME_ID_LENGTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuessRecord:
    word: str
    player_name: str
    color: str
    correct: bool


@dataclass(frozen=True)
class Participant:
    connection_id: str
    session_id: str
    player_name: str
    color: str


@dataclass
class GameSession:
    id: str
    article_title: str
    article_text: str
    tokens: tuple[str, ...]
    guessed_words: set[str] = field(default_factory=set)
    guess_history: list[GuessRecord] = field(default_factory=list)
    ended: bool = False
    winner_title: str | None = None  # только при победе, не при give_up
    assigned_colors: list[str] = field(default_factory=list)
    vocabulary: frozenset[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.vocabulary = frozenset(t.lower() for t in self.tokens if is_word(t))

    @classmethod
    def from_article(cls, game_id: str, article: Article) -> "GameSession":
        return cls(
            id=game_id,
            article_title=article.title,
            article_text=article.text,
            tokens=tuple(article.tokens),
        )

    def assign_color(self) -> str:
        """Цвет по номеру входа: palette[join_index % len(palette)]."""
        color = COLORS[len(self.assigned_colors) % len(COLORS)]
        self.assigned_colors.append(color)
        return color


def generate_game_id() -> str:
    return "".join(secrets.choice(GAME_ID_ALPHABET) for _ in range(GAME_ID_LENGTH))


def normalize_game_id(raw: str | None) -> str | None:
    game_id = (raw or "").strip()
    return game_id or None


class SessionStore:
    def __init__(self, provider: ArticleProvider):
        self._provider = provider
        self._sessions: dict[str, GameSession] = {}
        self._pending: dict[str, asyncio.Future] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, game_id: str) -> GameSession | None:
        return self._sessions.get(game_id)

    def count(self) -> int:
        return len(self._sessions)

    def lock(self, game_id: str) -> asyncio.Lock:
        """Замок партии: все изменения состояния и рассылки идут под ним."""
        lock = self._locks.get(game_id)
        if lock is None:
            lock = self._locks[game_id] = asyncio.Lock()
        return lock

    async def resolve_or_create(self, game_id: str) -> GameSession:
        while True:
            session = self._sessions.get(game_id)
            if session is not None:
                return session
            pending = self._pending.get(game_id)
            if pending is None:
                break
            # создание уже идёт: ждём тот же результат
            try:
                return await asyncio.shield(pending)
            except asyncio.CancelledError:
                if not pending.cancelled():
                    raise
                # отменили создателя, а не нас: пробуем создать сами
                logger.info("Game %r creation was cancelled, retrying", game_id)

        pending = asyncio.get_running_loop().create_future()
        self._pending[game_id] = pending
        try:
            async with self.lock(game_id):
                article = await self._provider.fetch()
                session = GameSession.from_article(game_id, article)
                self._sessions[game_id] = session
            logger.info("Game %r loaded article: %r", game_id, session.article_title)
            pending.set_result(session)
            return session
        except asyncio.CancelledError:
            pending.cancel()
            raise
        except Exception as e:
            pending.set_exception(e)
            pending.exception()  # помечаем как полученное, ждущие получат его сами
            raise
        finally:
            del self._pending[game_id]
