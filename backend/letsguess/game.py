"""
Логика партии: приём догадок, проверка победы, сдача.
Функции только меняют состояние сессии и возвращают событие;
сериализация (замок партии) и рассылка выполняются в coordinator.
"""
import enum
import logging
import re

from .sessions import GameSession, GuessRecord, Participant

logger = logging.getLogger(__name__)

_PARENS_RE = re.compile(r"\(.*?\)")
_NON_WORD_RE = re.compile(r"[^\w\s]")


class GameEvent(enum.Enum):
    IGNORED = "ignored"
    UPDATED = "updated"
    WON = "won"
    REVEALED = "revealed"


def normalize_guess(raw: str | None) -> str:
    return (raw or "").strip().lower()


def title_requirements(title: str) -> frozenset[str]:
    """
    Слова заголовка, которые нужно угадать: без скобок и пунктуации,
    в нижнем регистре. "The Great (Example) War" -> {the, great, war}.
    """
    normalized = _NON_WORD_RE.sub("", _PARENS_RE.sub("", title)).lower()
    return frozenset(normalized.split())


def submit_guess(session: GameSession, participant: Participant, raw_word: str | None) -> GameEvent:
    word = normalize_guess(raw_word)
    if not word or session.ended:
        return GameEvent.IGNORED
    if word in session.guessed_words:
        return GameEvent.IGNORED

    session.guessed_words.add(word)
    session.guess_history.append(GuessRecord(
        word=word,
        player_name=participant.player_name,
        color=participant.color,
        correct=word in session.vocabulary,
    ))

    # пустой набор (заголовок без слов) засчитывается первой принятой догадкой
    if title_requirements(session.article_title) <= session.guessed_words:
        session.ended = True
        session.winner_title = session.article_title
        logger.info("Game %r won by %r with %r", session.id, participant.player_name, word)
        return GameEvent.WON
    return GameEvent.UPDATED


def give_up(session: GameSession) -> GameEvent:
    if session.ended:
        return GameEvent.IGNORED
    session.ended = True
    session.winner_title = None
    logger.info("Game %r revealed without winner", session.id)
    return GameEvent.REVEALED
