"""
Источник статей для новых партий: случайная статья Википедии.
Наружу всегда отдаётся Article (title, text, tokens); при любой ошибке
сети или разбора возвращается запасная статья, исключения не выходят.
"""
import asyncio
import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Protocol

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from .config import get_config
from .constants import (
    FALLBACK_TEXT,
    FALLBACK_TITLE,
    MIN_PARAGRAPH_LENGTH,
    PARAGRAPHS_PER_SECTION,
    RETRY_STATUSES,
    SKIPPED_SECTIONS,
)

logger = logging.getLogger(__name__)

_SPLIT_RE = re.compile(r"(\W+)")
_HEADING_RE = re.compile(r"^(={2,})\s*(.*?)\s*\1$")
_WORD_RE = re.compile(r"\w")


class ArticleFetchError(Exception):
    """В ответе API нет пригодной статьи."""


_FETCH_ERRORS = (httpx.HTTPError, ArticleFetchError, ValueError, KeyError, IndexError, TypeError)


def is_transient_error(exc: BaseException) -> bool:
    """Повторяем только сетевые сбои, 429/5xx и пустую выдержку."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRY_STATUSES
    return isinstance(exc, (httpx.TransportError, ArticleFetchError))


class _RetryAfterOrBackoff(wait_base):
    """Пауза из заголовка Retry-After, иначе экспоненциальная."""

    def __init__(self, backoff: float, max_wait: float):
        self.max_wait = max_wait
        self._exponential = wait_exponential(multiplier=backoff, max=max_wait)

    def __call__(self, retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(exc, httpx.HTTPStatusError):
            retry_after = exc.response.headers.get("Retry-After", "")
            if retry_after.strip().isdigit():
                return min(float(retry_after), self.max_wait)
        return self._exponential(retry_state)


def tokenize(text: str) -> list[str]:
    """Слова и разделители вперемешку; "".join(tokenize(t)) == t."""
    return [t for t in _SPLIT_RE.split(text) if t]


def is_word(token: str) -> bool:
    """Угадываемое слово: содержит хотя бы один словесный символ."""
    return _WORD_RE.search(token) is not None


@dataclass(frozen=True)
class Article:
    title: str
    text: str
    tokens: tuple[str, ...]

    @classmethod
    def from_text(cls, title: str, text: str) -> "Article":
        return cls(title=title, text=text, tokens=tuple(tokenize(text)))


def fallback_article() -> Article:
    return Article.from_text(FALLBACK_TITLE, FALLBACK_TEXT)


class ArticleProvider(Protocol):
    async def fetch(self) -> Article: ...


def build_article_text(title: str, extract: str) -> str:
    """
    Собирает текст игры из plain-text выдержки (exsectionformat=wiki):
    два первых длинных абзаца вступления, затем по два абзаца из каждого
    раздела второго уровня, кроме служебных (References и т.п.).
    """
    intro: list[str] = []
    sections: list[tuple[str, list[str]]] = []
    current: list[str] = intro
    for line in extract.split("\n"):
        line = line.strip()
        if not line:
            continue
        m = _HEADING_RE.match(line)
        if m:
            # подразделы (=== ... ===) остаются в текущем разделе
            if len(m.group(1)) == 2:
                current = []
                sections.append((m.group(2), current))
            continue
        if len(line) > MIN_PARAGRAPH_LENGTH:
            current.append(line)

    parts = intro[:PARAGRAPHS_PER_SECTION]
    for heading, paragraphs in sections:
        if heading in SKIPPED_SECTIONS or not paragraphs:
            continue
        parts.append(f"\n\n{heading}\n")
        parts.extend(paragraphs[:PARAGRAPHS_PER_SECTION])
    if not parts:
        raise ArticleFetchError(f"no usable paragraphs in {title!r}")
    return f"{title}. " + "\n\n".join(parts)


class WikipediaArticleProvider:
    """Случайная статья через REST API (заголовок) и Action API (текст)."""

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._transport = transport
        self._sleep = sleep

    async def fetch(self) -> Article:
        config = get_config()
        try:
            return await asyncio.wait_for(self._fetch_with_retries(), config.fetch_deadline)
        except asyncio.TimeoutError:
            logger.warning("Article fetch exceeded %.1fs, using fallback", config.fetch_deadline)
        except _FETCH_ERRORS as e:
            logger.warning("Failed to load article, using fallback: %s", e)
        return fallback_article()

    def _retrying(self) -> AsyncRetrying:
        config = get_config()
        return AsyncRetrying(
            stop=stop_after_attempt(config.fetch_attempts),
            wait=_RetryAfterOrBackoff(config.fetch_backoff, config.fetch_backoff_max),
            retry=retry_if_exception(is_transient_error),
            before_sleep=before_sleep_log(logger, logging.INFO),
            sleep=self._sleep,
            reraise=True,
        )

    async def _fetch_with_retries(self) -> Article:
        config = get_config()
        async with httpx.AsyncClient(
            timeout=config.fetch_timeout,
            headers={"User-Agent": config.user_agent},
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            return await self._retrying()(self._fetch_once, client)

    async def _fetch_once(self, client: httpx.AsyncClient) -> Article:
        config = get_config()
        res = await client.get(f"{config.wikipedia_rest_url}/page/random/summary")
        res.raise_for_status()
        title = res.json()["title"]

        res = await client.get(
            config.wikipedia_api_url,
            params={
                "action": "query",
                "prop": "extracts",
                "explaintext": "1",
                "exsectionformat": "wiki",
                "redirects": "1",
                "titles": title,
                "format": "json",
                "formatversion": "2",
            },
        )
        res.raise_for_status()
        pages = res.json()["query"]["pages"]
        extract = pages[0].get("extract") if pages else None
        if not extract:
            raise ArticleFetchError(f"empty extract for {title!r}")
        return Article.from_text(title, build_article_text(title, extract))

