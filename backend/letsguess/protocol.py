"""
Протокол WebSocket: входящие сообщения (закрытый набор по полю type)
и сборка исходящих payload'ов.
"""
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .constants import DEFAULT_PLAYER_NAME, MAX_PLAYER_NAME_LENGTH
from .redaction import render, render_title
from .sessions import GameSession


class JoinGame(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["join_game"]
    game_id: str | None = Field(default=None, alias="gameId")
    name: str | None = None


class SubmitGuess(BaseModel):
    type: Literal["submit_guess"]
    word: str


class GiveUp(BaseModel):
    type: Literal["give_up"]


InboundMessage = Annotated[Union[JoinGame, SubmitGuess, GiveUp], Field(discriminator="type")]

_inbound_adapter: TypeAdapter[InboundMessage] = TypeAdapter(InboundMessage)


def parse_message(raw: str | bytes) -> InboundMessage:
    """Бросает pydantic.ValidationError на битый JSON и неизвестный type."""
    return _inbound_adapter.validate_json(raw)


def clean_player_name(name: str | None) -> str:
    name = (name or "").strip()[:MAX_PLAYER_NAME_LENGTH]
    return name or DEFAULT_PLAYER_NAME


def guesses_payload(session: GameSession) -> list[dict[str, Any]]:
    return [
        {"word": g.word, "name": g.player_name, "color": g.color, "correct": g.correct}
        for g in session.guess_history
    ]


def article_init_payload(session: GameSession) -> dict[str, Any]:
    return {
        "type": "article_init",
        "gameId": session.id,
        "text": render(session),
        "title": render_title(session),
        "guesses": guesses_payload(session),
    }


def article_update_payload(session: GameSession) -> dict[str, Any]:
    return {
        "type": "article_update",
        "text": render(session),
        "guesses": guesses_payload(session),
    }


def game_over_payload(session: GameSession) -> dict[str, Any]:
    return {
        "type": "game_over",
        "text": session.article_text,
        "winner": session.winner_title,
    }
