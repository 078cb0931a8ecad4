import asyncio
import itertools

import pytest

from letsguess.articles import Article
from letsguess.config import get_config
from letsguess.coordinator import GameCoordinator
from letsguess.sessions import GameSession, Participant, SessionStore
from letsguess.ws_manager import WSManager

ARTICLE_TITLE = "Internet"
ARTICLE_TEXT = "Internet. The Internet is a global network, built in 1969."


class FakeProvider:
    def __init__(self, title=ARTICLE_TITLE, text=ARTICLE_TEXT, delay=0.0):
        self.title = title
        self.text = text
        self.delay = delay
        self.calls = 0

    async def fetch(self) -> Article:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        return Article.from_text(self.title, self.text)


class FakeConnection:
    _ids = itertools.count(1)

    def __init__(self, connection_id=None, fail=False):
        self.connection_id = connection_id or f"conn-{next(self._ids)}"
        self.fail = fail
        self.received: list[dict] = []

    async def send(self, payload):
        # отдаём управление циклу, чтобы конкурентные задачи перемешивались
        await asyncio.sleep(0)
        if self.fail:
            raise ConnectionError("socket closed")
        self.received.append(payload)

    def of_type(self, msg_type):
        return [m for m in self.received if m["type"] == msg_type]


@pytest.fixture(autouse=True)
def _fresh_config():
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def coordinator(provider):
    return GameCoordinator(SessionStore(provider), WSManager())


@pytest.fixture
def connection_factory():
    return FakeConnection


@pytest.fixture
def make_session():
    def _make(title=ARTICLE_TITLE, text=ARTICLE_TEXT, game_id="abc123"):
        return GameSession.from_article(game_id, Article.from_text(title, text))
    return _make


@pytest.fixture
def alice():
    return Participant(connection_id="c1", session_id="abc123", player_name="Alice", color="#d32f2f")


@pytest.fixture
def bob():
    return Participant(connection_id="c2", session_id="abc123", player_name="Bob", color="#1976d2")
