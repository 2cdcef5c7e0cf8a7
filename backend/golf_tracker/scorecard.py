"""
Scorecard state for the game currently being played.

The card lives in memory until it is saved. It is a frozen value: every
transition goes through ``reduce`` and returns a new card, so the previous
state is never mutated.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict

ROUNDS = 9

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _blank_scores() -> tuple[int, ...]:
    return (0,) * ROUNDS


def clamp_score(value: object) -> int:
    """Parse a typed score from its leading integer ("7 pts" is 7, "3.7" is 3).

    Input with no leading digits counts as 0 and negatives clamp to 0.
    """
    match = _LEADING_INT.match(str(value)) if value is not None else None
    if match is None:
        return 0
    return max(int(match.group(1)), 0)


class ScorecardPlayer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    scores: tuple[int, ...] = _blank_scores()

    @property
    def total(self) -> int:
        return sum(self.scores)


class Banner(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["success", "error"]
    text: str


class Scorecard(BaseModel):
    model_config = ConfigDict(frozen=True)

    players: tuple[ScorecardPlayer, ...] = ()
    next_id: int = 1
    banner: Banner | None = None

    @property
    def leader(self) -> ScorecardPlayer | None:
        """Lowest total wins; on ties the player added first leads."""
        if not self.players:
            return None
        return min(self.players, key=lambda p: p.total)

    @property
    def has_unsaved_scores(self) -> bool:
        return any(score for player in self.players for score in player.scores)


# Actions


class AddPlayer(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str


class UpdateScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_id: int
    round_index: int
    value: Any = 0


class RemovePlayer(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_id: int


class NewGame(BaseModel):
    """Clear the card; ``confirmed`` is the answer to the "scores will be lost" prompt."""

    model_config = ConfigDict(frozen=True)

    confirmed: bool = False


class SaveSucceeded(BaseModel):
    model_config = ConfigDict(frozen=True)

    game_id: int


class SaveFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str


class DismissBanner(BaseModel):
    model_config = ConfigDict(frozen=True)


Action = Union[AddPlayer, UpdateScore, RemovePlayer, NewGame, SaveSucceeded, SaveFailed, DismissBanner]


def add_player(card: Scorecard, name: str) -> Scorecard:
    name = name.strip()
    if not name:
        return card
    player = ScorecardPlayer(id=card.next_id, name=name)
    return card.model_copy(update={"players": (*card.players, player), "next_id": card.next_id + 1})


def update_score(card: Scorecard, player_id: int, round_index: int, value: object) -> Scorecard:
    if not 0 <= round_index < ROUNDS:
        return card
    players = list(card.players)
    for i, player in enumerate(players):
        if player.id == player_id:
            scores = list(player.scores)
            scores[round_index] = clamp_score(value)
            players[i] = player.model_copy(update={"scores": tuple(scores)})
            return card.model_copy(update={"players": tuple(players)})
    return card


def remove_player(card: Scorecard, player_id: int) -> Scorecard:
    players = tuple(p for p in card.players if p.id != player_id)
    return card.model_copy(update={"players": players})


def new_game(card: Scorecard, confirmed: bool = False) -> Scorecard:
    if card.has_unsaved_scores and not confirmed:
        return card
    return card.model_copy(update={"players": (), "banner": None})


def reduce(card: Scorecard, action: Action) -> Scorecard:
    """Apply one UI action to the card and return the next card."""
    if isinstance(action, AddPlayer):
        return add_player(card, action.name)
    if isinstance(action, UpdateScore):
        return update_score(card, action.player_id, action.round_index, action.value)
    if isinstance(action, RemovePlayer):
        return remove_player(card, action.player_id)
    if isinstance(action, NewGame):
        return new_game(card, action.confirmed)
    if isinstance(action, SaveSucceeded):
        banner = Banner(kind="success", text=f"Game #{action.game_id} saved successfully!")
        return card.model_copy(update={"banner": banner})
    if isinstance(action, SaveFailed):
        return card.model_copy(update={"banner": Banner(kind="error", text=f"Error: {action.message}")})
    if isinstance(action, DismissBanner):
        return card.model_copy(update={"banner": None})
    raise TypeError(f"Unknown scorecard action: {action!r}")


def save_payload(card: Scorecard, date: str | None = None) -> dict:
    """Package the card as the body of ``POST /api/games``."""
    return {
        "date": date or datetime.now(timezone.utc).isoformat(),
        "players": [
            {"name": p.name, "scores": list(p.scores), "totalScore": p.total}
            for p in card.players
        ],
    }
