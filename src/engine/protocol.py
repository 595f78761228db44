from __future__ import annotations

from typing import ClassVar, Protocol, runtime_checkable

from src.engine.models import (
    Action,
    Event,
    GameConfig,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)


@runtime_checkable
class GamePlugin(Protocol):
    """Rules of one game, driven by the engine through plain JSON-safe state.

    Plugins hold no per-game state of their own: everything lives in the
    ``game_data`` dict the engine passes back on every call.
    """

    game_id: ClassVar[str]
    display_name: ClassVar[str]
    min_players: ClassVar[int]
    max_players: ClassVar[int]
    description: ClassVar[str]
    config_schema: ClassVar[dict]  # JSON schema of GameConfig.options

    def create_initial_state(
        self,
        players: list[Player],
        config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        """Return the opening game_data, the first phase and opening events.

        Must be deterministic for the same players and config.
        """
        ...

    def validate_config(self, options: dict) -> list[str]:
        """Problems with *options*; an empty list means they are usable."""
        ...

    def get_valid_actions(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> list[dict]:
        ...

    def validate_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
    ) -> str | None:
        """Rejection message for *action*, or None if it may be applied."""
        ...

    def apply_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        """Apply an action already accepted by validate_action.

        Auto-resolve phases are applied with a synthetic action whose
        action_type is the phase name.
        """
        ...

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        ...

    def get_spectator_summary(
        self,
        game_data: dict,
        phase: Phase,
        players: list[Player],
    ) -> dict:
        ...
