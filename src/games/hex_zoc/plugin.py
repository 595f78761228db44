"""HexZocPlugin — implements the GamePlugin protocol for Hex Zone Control."""

from __future__ import annotations

from typing import ClassVar

from src.config import settings
from src.engine.models import (
    Action,
    Event,
    ExpectedAction,
    GameConfig,
    GameResult,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)
from src.games.hex_zoc.board import Board
from src.games.hex_zoc.captures import group_batches, resolve_captures
from src.games.hex_zoc.errors import PlacementError
from src.games.hex_zoc.geometry import all_valid_hexes
from src.games.hex_zoc.scoring import final_outcome
from src.games.hex_zoc.types import Color, HexCoord
from src.games.hex_zoc.zoc import zone_of_control

# Seat order decides colour: seat 0 plays white and moves first
SEAT_COLORS = [Color.WHITE, Color.BLACK]

MAX_GRID_RADIUS = 32


def _place_phase(player: Player, player_index: int) -> Phase:
    return Phase(
        name="place_tile",
        expected_actions=[
            ExpectedAction(
                player_id=player.player_id,
                action_type="place_tile",
            ),
        ],
        auto_resolve=False,
        metadata={"player_index": player_index},
    )


def _reveal_phase(player_index: int, batch_index: int) -> Phase:
    return Phase(
        name="reveal_captures",
        auto_resolve=True,
        metadata={"player_index": player_index, "batch_index": batch_index},
    )


class HexZocPlugin:
    """Hex Zone Control — line and encirclement captures on a hexagonal board."""

    game_id: ClassVar[str] = "hex_zoc"
    display_name: ClassVar[str] = "Hex Zone Control"
    min_players: ClassVar[int] = 2
    max_players: ClassVar[int] = 2
    description: ClassVar[str] = (
        "Place tiles on a hexagonal board. Flank enemy lines Othello-style or "
        "encircle enemy tiles with your zone of control to flip them."
    )
    config_schema: ClassVar[dict] = {
        "type": "object",
        "properties": {
            "grid_radius": {"type": "integer", "minimum": 1, "maximum": MAX_GRID_RADIUS},
            "tiles_per_player": {"type": "integer", "minimum": 1},
        },
    }

    # ── Lifecycle ──

    def create_initial_state(
        self,
        players: list[Player],
        config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        radius = config.options.get("grid_radius", settings.grid_radius)
        tiles_per_player = config.options.get("tiles_per_player", settings.tiles_per_player)
        board = Board(radius, tiles_per_player)

        game_data: dict = {
            "board": board.to_dict(),
            "colors": {p.player_id: SEAT_COLORS[i].value for i, p in enumerate(players)},
            "scores": {p.player_id: 0 for p in players},
            "current_player_index": 0,
            "pending_batches": [],
            "last_placed": None,
        }

        events = [
            Event(event_type="game_started", payload={
                "players": [p.player_id for p in players],
                "colors": game_data["colors"],
                "grid_radius": radius,
                "tiles_per_player": tiles_per_player,
            }),
        ]

        return game_data, _place_phase(players[0], 0), events

    def validate_config(self, options: dict) -> list[str]:
        errors: list[str] = []
        radius = options.get("grid_radius")
        if radius is not None and (
            not isinstance(radius, int) or not 1 <= radius <= MAX_GRID_RADIUS
        ):
            errors.append(f"grid_radius must be an integer between 1 and {MAX_GRID_RADIUS}")
        tiles = options.get("tiles_per_player")
        if tiles is not None and (not isinstance(tiles, int) or tiles < 1):
            errors.append("tiles_per_player must be a positive integer")
        return errors

    # ── Core game loop ──

    def get_valid_actions(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> list[dict]:
        if phase.name != "place_tile":
            return []

        expected_pid = phase.acting_player
        if player_id != expected_pid:
            return []

        board = Board.from_dict(game_data["board"])
        if board.remaining(Color(game_data["colors"][player_id])) <= 0:
            return []

        return [
            {"q": coord.q, "r": coord.r}
            for coord in all_valid_hexes(board.radius)
            if board.is_empty(coord)
        ]

    def validate_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
    ) -> str | None:
        if phase.name == "place_tile":
            return self._validate_place_tile(game_data, phase, action)
        if phase.name == "game_over":
            return "The game is over"
        return None

    def apply_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        if phase.name == "place_tile":
            return self._apply_place_tile(game_data, phase, action, players)

        if phase.name == "reveal_captures":
            return self._apply_reveal_captures(game_data, phase, action, players)

        raise ValueError(f"Unknown phase: {phase.name}")

    # ── View filtering ──

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        # No hidden info: everything, plus both zones for highlighting
        board = Board.from_dict(game_data["board"])
        return {
            "board": game_data["board"],
            "colors": game_data["colors"],
            "scores": game_data["scores"],
            "current_player_index": game_data["current_player_index"],
            "pending_batches": game_data["pending_batches"],
            "last_placed": game_data["last_placed"],
            "zones": {
                color.value: sorted(c.to_key() for c in zone_of_control(board, color))
                for color in Color
            },
        }

    def get_spectator_summary(
        self,
        game_data: dict,
        phase: Phase,
        players: list[Player],
    ) -> dict:
        return {
            "scores": game_data["scores"],
            "tiles_remaining": game_data["board"]["supply"],
            "tiles_placed": len(game_data["board"]["tiles"]),
        }

    # ── Private handlers ──

    def _validate_place_tile(
        self, game_data: dict, phase: Phase, action: Action
    ) -> str | None:
        expected_pid = phase.acting_player
        if action.player_id != expected_pid:
            return f"Not your turn: expected {expected_pid}"

        q = action.payload.get("q")
        r = action.payload.get("r")

        if q is None or r is None:
            return "Missing q or r in payload"

        if not isinstance(q, int) or not isinstance(r, int):
            return "q and r must be integers"

        if game_data["pending_batches"]:
            return "Captures are still being revealed"

        board = Board.from_dict(game_data["board"])
        color = Color(game_data["colors"][action.player_id])
        try:
            board.check_placement(HexCoord(q=q, r=r), color)
        except PlacementError as e:
            return e.message
        return None

    def _apply_place_tile(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        coord = HexCoord(q=action.payload["q"], r=action.payload["r"])
        player_id = action.player_id
        color = Color(game_data["colors"][player_id])
        current_idx = game_data["current_player_index"]

        board = Board.from_dict(game_data["board"])
        board.place(coord, color)
        captures = resolve_captures(board, coord, color)
        batches = group_batches(captures)

        game_data["board"] = board.to_dict()
        game_data["last_placed"] = coord.to_key()
        game_data["pending_batches"] = [
            {"rank": b.rank, "cells": [c.to_key() for c in b.cells]} for b in batches
        ]
        self._update_scores(game_data, board)

        events = [
            Event(
                event_type="tile_placed",
                player_id=player_id,
                payload={
                    "cell": coord.to_key(),
                    "color": color.value,
                    "captures": [
                        {"cell": c.coord.to_key(), "rank": c.rank, "rule": c.rule.value}
                        for c in captures
                    ],
                },
            ),
        ]

        if batches:
            return TransitionResult(
                game_data=game_data,
                events=events,
                next_phase=_reveal_phase(current_idx, 0),
                scores=game_data["scores"],
                game_over=None,
            )

        return self._finish_turn(game_data, events, players)

    def _apply_reveal_captures(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        current_idx = game_data["current_player_index"]
        color = Color(game_data["colors"][players[current_idx].player_id])
        batch = game_data["pending_batches"].pop(0)

        board = Board.from_dict(game_data["board"])
        for key in batch["cells"]:
            board.set_owner(HexCoord.from_key(key), color)
        game_data["board"] = board.to_dict()
        self._update_scores(game_data, board)

        events = [
            Event(
                event_type="captures_revealed",
                player_id=players[current_idx].player_id,
                payload={"rank": batch["rank"], "cells": batch["cells"], "color": color.value},
            ),
        ]

        if game_data["pending_batches"]:
            return TransitionResult(
                game_data=game_data,
                events=events,
                next_phase=_reveal_phase(current_idx, phase.metadata.get("batch_index", 0) + 1),
                scores=game_data["scores"],
                game_over=None,
            )

        return self._finish_turn(game_data, events, players)

    def _finish_turn(
        self,
        game_data: dict,
        events: list[Event],
        players: list[Player],
    ) -> TransitionResult:
        board = Board.from_dict(game_data["board"])
        if board.supplies_exhausted():
            return self._end_game(game_data, events, players, board)

        next_idx = (game_data["current_player_index"] + 1) % len(players)
        next_player = players[next_idx]
        game_data["current_player_index"] = next_idx
        events.append(Event(event_type="turn_changed", player_id=next_player.player_id))

        return TransitionResult(
            game_data=game_data,
            events=events,
            next_phase=_place_phase(next_player, next_idx),
            scores=game_data["scores"],
            game_over=None,
        )

    def _end_game(
        self,
        game_data: dict,
        events: list[Event],
        players: list[Player],
        board: Board,
    ) -> TransitionResult:
        outcome = final_outcome(board)
        scores = game_data["scores"]

        if outcome.winner is None:
            winners = [p.player_id for p in players]
            reason = "draw"
        else:
            winners = [
                p.player_id for p in players
                if game_data["colors"][p.player_id] == outcome.winner.value
            ]
            reason = "normal"

        events.append(Event(
            event_type="game_ended",
            payload={
                "final_scores": dict(scores),
                "winners": winners,
                "result": outcome.describe(),
            },
        ))

        return TransitionResult(
            game_data=game_data,
            events=events,
            next_phase=Phase(name="game_over", auto_resolve=False),
            scores=scores,
            game_over=GameResult(
                winners=winners,
                final_scores={pid: float(s) for pid, s in scores.items()},
                reason=reason,
            ),
        )

    @staticmethod
    def _update_scores(game_data: dict, board: Board) -> None:
        counts = board.tile_counts()
        for pid, color in game_data["colors"].items():
            game_data["scores"][pid] = counts[Color(color)]
