"""Rejections raised by the Hex Zone Control rules."""

from __future__ import annotations

from src.engine.errors import GameEngineError, InvalidActionError


class PlacementError(InvalidActionError):
    """A placement request was refused; the game state is unchanged."""

    code = "placement_rejected"


class InvalidCoordinateError(PlacementError):
    code = "invalid_coordinate"


class CellOccupiedError(PlacementError):
    code = "cell_occupied"


class SupplyExhaustedError(PlacementError):
    code = "supply_exhausted"


class GameAlreadyOverError(PlacementError):
    code = "game_already_over"


class CapturesInProgressError(PlacementError):
    """A placement arrived while a capture sequence is still being revealed."""

    code = "captures_in_progress"


class InvalidBatchIndexError(GameEngineError):
    """A batch confirmation did not match the next staged batch."""

    code = "invalid_batch_index"

    def __init__(self, message: str, batch_index: int | None = None):
        super().__init__(message)
        self.batch_index = batch_index
