"""Board state for Hex Zone Control.

The board owns every placed tile and the per-colour tile supply. Tiles are
never removed once placed; they only change colour when captured.
"""

from __future__ import annotations

from src.games.hex_zoc.errors import (
    CellOccupiedError,
    InvalidCoordinateError,
    SupplyExhaustedError,
)
from src.games.hex_zoc.geometry import is_on_board
from src.games.hex_zoc.types import GRID_RADIUS, TILES_PER_PLAYER, Color, HexCoord


class Board:
    def __init__(
        self,
        radius: int = GRID_RADIUS,
        tiles_per_player: int = TILES_PER_PLAYER,
    ) -> None:
        self.radius = radius
        self.tiles: dict[HexCoord, Color] = {}
        self.supply: dict[Color, int] = {color: tiles_per_player for color in Color}

    # ── Queries ──

    def is_valid(self, coord: HexCoord) -> bool:
        return is_on_board(coord, self.radius)

    def occupant(self, coord: HexCoord) -> Color | None:
        return self.tiles.get(coord)

    def is_empty(self, coord: HexCoord) -> bool:
        return coord not in self.tiles

    def remaining(self, color: Color) -> int:
        return self.supply[color]

    def tiles_of(self, color: Color) -> list[HexCoord]:
        """Coordinates owned by *color*, in the order the cells were first filled."""
        return [coord for coord, owner in self.tiles.items() if owner == color]

    def tile_counts(self) -> dict[Color, int]:
        counts = {color: 0 for color in Color}
        for owner in self.tiles.values():
            counts[owner] += 1
        return counts

    def supplies_exhausted(self) -> bool:
        return all(count == 0 for count in self.supply.values())

    # ── Mutation ──

    def check_placement(self, coord: HexCoord, color: Color) -> None:
        """Raise the matching PlacementError if *color* cannot play at *coord*."""
        if not self.is_valid(coord):
            raise InvalidCoordinateError(f"Cell {coord} is outside the board")
        if coord in self.tiles:
            raise CellOccupiedError(f"Cell {coord} is already occupied")
        if self.supply[color] <= 0:
            raise SupplyExhaustedError(f"{color.label} has no tiles remaining")

    def place(self, coord: HexCoord, color: Color) -> None:
        self.check_placement(coord, color)
        self.tiles[coord] = color
        self.supply[color] -= 1

    def set_owner(self, coord: HexCoord, color: Color) -> None:
        """Give the tile at *coord* to *color* without touching supply."""
        if not self.is_valid(coord):
            raise InvalidCoordinateError(f"Cell {coord} is outside the board")
        self.tiles[coord] = color

    # ── Serialisation ──

    def copy(self) -> Board:
        clone = Board(self.radius)
        clone.tiles = dict(self.tiles)
        clone.supply = dict(self.supply)
        return clone

    def to_dict(self) -> dict:
        return {
            "radius": self.radius,
            "tiles": {coord.to_key(): owner.value for coord, owner in self.tiles.items()},
            "supply": {color.value: count for color, count in self.supply.items()},
        }

    @staticmethod
    def from_dict(data: dict) -> Board:
        board = Board(data["radius"])
        board.tiles = {
            HexCoord.from_key(key): Color(owner) for key, owner in data["tiles"].items()
        }
        board.supply = {Color(color): count for color, count in data["supply"].items()}
        return board
