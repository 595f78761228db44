"""Synchronous game simulator — advances game state through auto-resolve phases.

Lets tests and host applications play complete games through a plugin
without any session, storage or transport around it.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field

from src.engine.errors import (
    GameEngineError,
    GameNotActiveError,
    InvalidActionError,
    NotYourTurnError,
    PluginError,
)
from src.engine.models import (
    Action,
    Event,
    GameConfig,
    GameResult,
    Phase,
    Player,
    PlayerId,
)
from src.engine.protocol import GamePlugin

logger = logging.getLogger(__name__)

MAX_AUTO_RESOLVE_STEPS = 200


@dataclass
class SimulationState:
    """Mutable game state for synchronous simulation."""

    game_data: dict
    phase: Phase
    players: list[Player]
    scores: dict[str, float] = field(default_factory=dict)
    game_over: GameResult | None = None
    events: list[Event] = field(default_factory=list)


def start_simulation(
    plugin: GamePlugin,
    players: list[Player],
    config: GameConfig,
) -> SimulationState:
    """Create the initial state of a game and resolve any opening auto phases."""
    game_data, phase, events = plugin.create_initial_state(players, config)
    state = SimulationState(
        game_data=game_data,
        phase=phase,
        players=players,
        scores={p.player_id: 0.0 for p in players},
        events=list(events),
    )
    _run_auto_resolve(plugin, state)
    return state


def apply_action_and_resolve(
    plugin: GamePlugin,
    state: SimulationState,
    action: Action,
    validate: bool = True,
) -> None:
    """Apply an action and auto-resolve all subsequent auto-resolve phases.

    Mutates *state* in place.  After return, ``state.phase`` is either a
    non-auto-resolve phase (player needs to act) or ``state.game_over`` is set.
    Raises GameNotActiveError once the game is over, NotYourTurnError for
    an action from someone other than the acting player, and
    InvalidActionError if *validate* is set and the plugin rejects the
    action. The state is left untouched in all three cases.
    """
    _validate_envelope(state, action)

    if validate:
        error = plugin.validate_action(state.game_data, state.phase, action)
        if error:
            raise InvalidActionError(error, action)

    _apply(plugin, state, action)
    _run_auto_resolve(plugin, state)


def clone_state(state: SimulationState) -> SimulationState:
    """Deep-copy a simulation state.

    ``players`` is shared (immutable during a game).
    """
    return SimulationState(
        game_data=copy.deepcopy(state.game_data),
        phase=state.phase.model_copy(deep=True),
        players=state.players,  # shared, never mutated
        scores=dict(state.scores),
        game_over=state.game_over,
        events=list(state.events),
    )


def _validate_envelope(state: SimulationState, action: Action) -> None:
    if state.game_over is not None:
        raise GameNotActiveError(f"Game is over ({state.game_over.reason})")

    expected = state.phase.acting_player
    if expected is not None and action.player_id != expected:
        raise NotYourTurnError(f"Expected {expected}, got {action.player_id}")


def _apply(plugin: GamePlugin, state: SimulationState, action: Action) -> None:
    try:
        result = plugin.apply_action(
            state.game_data, state.phase, action, state.players
        )
    except GameEngineError:
        raise
    except Exception as e:
        logger.error(
            f"Plugin {plugin.game_id} failed in phase '{state.phase.name}': {e}",
            exc_info=True,
        )
        raise PluginError(f"{plugin.game_id} failed to apply {action.action_type}", e) from e

    state.game_data = result.game_data
    state.phase = result.next_phase
    state.scores = result.scores or state.scores
    state.game_over = result.game_over
    state.events.extend(result.events)


def _run_auto_resolve(plugin: GamePlugin, state: SimulationState) -> None:
    remaining = MAX_AUTO_RESOLVE_STEPS
    while state.phase.auto_resolve and not state.game_over:
        if remaining <= 0:
            raise RuntimeError(
                f"Phase '{state.phase.name}' did not settle after "
                f"{MAX_AUTO_RESOLVE_STEPS} auto-resolve steps"
            )
        remaining -= 1

        pid = _phase_player_id(state.phase, state.players)
        synthetic = Action(action_type=state.phase.name, player_id=pid)
        _apply(plugin, state, synthetic)


def _phase_player_id(phase: Phase, players: list[Player]) -> PlayerId:
    """Extract the acting player from a phase, falling back to first player."""
    if phase.acting_player is not None:
        return phase.acting_player
    pi = phase.metadata.get("player_index")
    if pi is not None and pi < len(players):
        return players[pi].player_id
    return players[0].player_id if players else PlayerId("system")
