"""Value types shared by the engine and every game plugin.

Game-specific state never appears here: plugins keep it in the JSON-safe
``game_data`` dict and only talk to the engine through these models.
"""

from __future__ import annotations

from typing import NewType

from pydantic import BaseModel, Field

PlayerId = NewType("PlayerId", str)


class Player(BaseModel):
    player_id: PlayerId
    display_name: str
    seat_index: int


class GameConfig(BaseModel):
    """Per-game options, validated by the plugin's ``validate_config``."""

    options: dict = Field(default_factory=dict)
    random_seed: int | None = None


class ExpectedAction(BaseModel):
    player_id: PlayerId | None = None
    action_type: str


class Phase(BaseModel):
    """A step of the game: who may act next, or an automatic step."""

    name: str
    expected_actions: list[ExpectedAction] = Field(default_factory=list)
    auto_resolve: bool = False
    metadata: dict = Field(default_factory=dict)

    @property
    def acting_player(self) -> PlayerId | None:
        if not self.expected_actions:
            return None
        return self.expected_actions[0].player_id


class Action(BaseModel):
    action_type: str
    player_id: PlayerId
    payload: dict = Field(default_factory=dict)


class Event(BaseModel):
    event_type: str
    player_id: PlayerId | None = None
    payload: dict = Field(default_factory=dict)


class GameResult(BaseModel):
    winners: list[PlayerId]
    final_scores: dict[str, float]  # PlayerId -> score
    reason: str = "normal"

    @property
    def is_draw(self) -> bool:
        return self.reason == "draw"


class TransitionResult(BaseModel):
    """Everything a plugin hands back after applying one action."""

    game_data: dict
    events: list[Event]
    next_phase: Phase
    scores: dict[str, float] = Field(default_factory=dict)
    game_over: GameResult | None = None
