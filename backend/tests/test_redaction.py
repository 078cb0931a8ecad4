from letsguess.articles import is_word, tokenize
from letsguess.redaction import redact_tokens, render, render_title

GLYPH = "█"


def test_unguessed_words_are_masked_with_same_length(make_session):
    session = make_session()
    text = render(session)
    assert text == "████████. The ████████ is a ██████ ███████, █████ in ████."
    assert text.split()[6] == GLYPH * 7 + ","


def test_stopwords_and_punctuation_always_verbatim(make_session):
    session = make_session(text="The cat, and the dog!")
    assert render(session) == "The ███, and the ███!"
    session.guessed_words.update({"the", "and"})
    assert render(session) == "The ███, and the ███!"


def test_guessed_words_revealed_case_insensitively(make_session):
    session = make_session()
    session.guessed_words.add("internet")
    assert render(session) == "Internet. The Internet is a ██████ ███████, █████ in ████."


def test_ended_session_reveals_full_text(make_session):
    session = make_session()
    session.ended = True
    assert render(session) == session.article_text
    assert render_title(session) == session.article_title


def test_render_preserves_separators(make_session):
    session = make_session(text="Line one.\n\nSection\nMore  text here.")
    text = render(session)
    assert text.count("\n") == 3
    assert "  " in text
    assert len(text) == len(session.article_text)


def test_title_uses_same_rule(make_session):
    session = make_session(title="The Great (Example) War", text="The Great War.")
    assert render_title(session) == "The █████ (███████) ███"
    session.guessed_words.add("war")
    assert render_title(session) == "The █████ (███████) War"


def test_tokenize_round_trip():
    text = "Hello, world -- it's 2024!\n\nNext"
    tokens = tokenize(text)
    assert "".join(tokens) == text
    assert "" not in tokens
    assert [t for t in tokens if is_word(t)] == ["Hello", "world", "it", "s", "2024", "Next"]


def test_redact_tokens_skips_non_words():
    assert redact_tokens(["...", " ", "--"], set()) == "... --"
