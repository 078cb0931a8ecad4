"""
Редактирование текста: чистая функция от состояния партии.
Неугаданные слова заменяются блоками той же длины, разделители и
слова из стоп-листа выводятся как есть.
"""
from collections.abc import Iterable

from .articles import is_word, tokenize
from .constants import REDACTION_GLYPH
from .sessions import GameSession
from .stopwords import load_stopwords


def redact_tokens(tokens: Iterable[str], guessed: set[str], ended: bool = False) -> str:
    if ended:
        return "".join(tokens)
    stopwords = load_stopwords()
    out = []
    for token in tokens:
        lower = token.lower()
        if not is_word(token) or lower in stopwords or lower in guessed:
            out.append(token)
        else:
            out.append(REDACTION_GLYPH * len(token))
    return "".join(out)


def render(session: GameSession) -> str:
    return redact_tokens(session.tokens, session.guessed_words, session.ended)


def render_title(session: GameSession) -> str:
    return redact_tokens(tokenize(session.article_title), session.guessed_words, session.ended)
