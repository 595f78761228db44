"""HexZocGame — the turn controller a hosting UI drives directly.

A game moves through three states:

    AWAITING_PLACEMENT --request_placement--> STAGING_CAPTURES
    STAGING_CAPTURES --confirm_batch_applied (last)--> AWAITING_PLACEMENT | GAME_OVER

A placement with no captures skips staging and finishes the turn at once.
While captures are staged the host reveals them batch by batch at its own
pace, confirming each one; no further placement is accepted until the last
batch has been confirmed.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel

from src.config import settings
from src.games.hex_zoc.board import Board
from src.games.hex_zoc.captures import group_batches, resolve_captures
from src.games.hex_zoc.errors import (
    CapturesInProgressError,
    GameAlreadyOverError,
    InvalidBatchIndexError,
    PlacementError,
)
from src.games.hex_zoc.geometry import HexLayout, all_valid_hexes, is_valid_hex
from src.games.hex_zoc.scoring import final_outcome
from src.games.hex_zoc.types import CaptureBatch, Color, HexCoord, Outcome
from src.games.hex_zoc.zoc import tile_zone, zone_of_control

logger = logging.getLogger(__name__)


class TurnState(str, Enum):
    AWAITING_PLACEMENT = "awaiting_placement"
    STAGING_CAPTURES = "staging_captures"
    GAME_OVER = "game_over"


class PlacedTile(BaseModel):
    coord: HexCoord
    color: Color


class BatchConfirmation(BaseModel):
    """What changed after a staged batch was confirmed."""

    batch_index: int
    remaining_batches: int
    state: TurnState
    next_player: Color | None = None
    outcome: Outcome | None = None


class HexZocGame:
    def __init__(
        self,
        radius: int | None = None,
        tiles_per_player: int | None = None,
        layout: HexLayout | None = None,
    ) -> None:
        self.radius = radius if radius is not None else settings.grid_radius
        self.tiles_per_player = (
            tiles_per_player if tiles_per_player is not None else settings.tiles_per_player
        )
        self.layout = layout or HexLayout(size=settings.hex_size)
        self.reset()

    def reset(self) -> None:
        """Start over with an empty board and full supplies."""
        self.board = Board(self.radius, self.tiles_per_player)
        self.state = TurnState.AWAITING_PLACEMENT
        self.last_placed: PlacedTile | None = None
        self._current = Color.WHITE
        self._batches: list[CaptureBatch] = []
        self._next_batch = 0
        self._outcome: Outcome | None = None
        logger.info(
            f"New game: radius={self.radius}, tiles_per_player={self.tiles_per_player}"
        )

    # ------------------------------------------------------------------ #
    #  Turn flow
    # ------------------------------------------------------------------ #

    def request_placement(self, q: int, r: int) -> list[CaptureBatch]:
        """Place a tile for the current player.

        Returns the capture batches staged for reveal, lowest rank first; an
        empty list means the turn is already over. Raises a PlacementError
        subclass, with no state change, when the placement is refused.
        """
        color = self._current
        coord = HexCoord(q=q, r=r)

        try:
            if self.state == TurnState.GAME_OVER:
                raise GameAlreadyOverError("The game is over")
            if self.state == TurnState.STAGING_CAPTURES:
                raise CapturesInProgressError(
                    f"{len(self._batches) - self._next_batch} capture batches "
                    f"still waiting to be revealed"
                )
            self.board.place(coord, color)
        except PlacementError as e:
            logger.warning(f"Rejected {color.value} placement at {coord}: {e.code}")
            raise

        self.last_placed = PlacedTile(coord=coord, color=color)
        batches = group_batches(resolve_captures(self.board, coord, color))
        logger.debug(
            f"{color.value} placed at {coord}: "
            f"{sum(len(b.cells) for b in batches)} captures in {len(batches)} batches"
        )

        if not batches:
            self._finish_turn()
            return []

        self._batches = batches
        self._next_batch = 0
        self.state = TurnState.STAGING_CAPTURES
        return list(batches)

    def confirm_batch_applied(self, batch_index: int) -> BatchConfirmation:
        """Apply staged batch *batch_index*; batches must be confirmed in order."""
        if self.state != TurnState.STAGING_CAPTURES:
            raise InvalidBatchIndexError("No capture batches are staged", batch_index)
        if batch_index != self._next_batch:
            raise InvalidBatchIndexError(
                f"Expected batch {self._next_batch}, got {batch_index}", batch_index
            )

        batch = self._batches[batch_index]
        for cell in batch.cells:
            self.board.set_owner(cell, self._current)
        self._next_batch += 1
        logger.debug(f"Applied batch {batch_index} (rank {batch.rank}, {len(batch.cells)} cells)")

        remaining = len(self._batches) - self._next_batch
        if remaining > 0:
            return BatchConfirmation(
                batch_index=batch_index,
                remaining_batches=remaining,
                state=self.state,
            )

        self._batches = []
        self._next_batch = 0
        self._finish_turn()
        return BatchConfirmation(
            batch_index=batch_index,
            remaining_batches=0,
            state=self.state,
            next_player=None if self.state == TurnState.GAME_OVER else self._current,
            outcome=self._outcome,
        )

    def reveal_all(self) -> BatchConfirmation | None:
        """Confirm every remaining staged batch at once (no animation)."""
        confirmation = None
        while self.state == TurnState.STAGING_CAPTURES:
            confirmation = self.confirm_batch_applied(self._next_batch)
        return confirmation

    def _finish_turn(self) -> None:
        if self.board.supplies_exhausted():
            self.state = TurnState.GAME_OVER
            self._outcome = final_outcome(self.board)
            logger.info(f"Game over: {self._outcome.describe()}")
            return

        self._current = self._current.opponent
        self.state = TurnState.AWAITING_PLACEMENT

    # ------------------------------------------------------------------ #
    #  Queries
    # ------------------------------------------------------------------ #

    @property
    def current_player(self) -> Color:
        return self._current

    @property
    def pending_batches(self) -> list[CaptureBatch]:
        return list(self._batches[self._next_batch:])

    @property
    def next_batch_index(self) -> int | None:
        if self.state != TurnState.STAGING_CAPTURES:
            return None
        return self._next_batch

    def remaining_supply(self, color: Color) -> int:
        return self.board.remaining(color)

    def tile_counts(self) -> dict[Color, int]:
        return self.board.tile_counts()

    def is_game_over(self) -> bool:
        return self.state == TurnState.GAME_OVER

    def outcome(self) -> Outcome | None:
        return self._outcome

    def occupant(self, q: int, r: int) -> Color | None:
        return self.board.occupant(HexCoord(q=q, r=r))

    def all_valid_coordinates(self) -> tuple[HexCoord, ...]:
        return all_valid_hexes(self.radius)

    def zone_of_control(self, color: Color) -> set[HexCoord]:
        return zone_of_control(self.board, color)

    def coordinate_at(self, x: float, y: float) -> HexCoord | None:
        """The on-board cell under pixel (x, y), if any."""
        coord = self.layout.pixel_to_hex(x, y)
        if not is_valid_hex(coord.q, coord.r, self.radius):
            return None
        return coord

    def preview_zone(self, q: int, r: int) -> tuple[Color, set[HexCoord]] | None:
        """Zone projected from a hovered cell, and whose zone it is.

        An occupied cell shows its owner's tile zone; an empty one shows the
        zone the current player would gain by playing there.
        """
        if self.state == TurnState.GAME_OVER or not is_valid_hex(q, r, self.radius):
            return None
        coord = HexCoord(q=q, r=r)
        color = self.board.occupant(coord) or self._current
        return color, tile_zone(coord, self.radius)
