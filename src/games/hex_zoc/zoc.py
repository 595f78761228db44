"""Zone of control: the cells a colour's tiles influence."""

from __future__ import annotations

from src.games.hex_zoc.board import Board
from src.games.hex_zoc.geometry import is_on_board, surrounding_hexes
from src.games.hex_zoc.types import GRID_RADIUS, Color, HexCoord


def tile_zone(coord: HexCoord, radius: int = GRID_RADIUS) -> set[HexCoord]:
    """The cell itself plus its on-board neighbours (at most 7 cells)."""
    zone = {coord} if is_on_board(coord, radius) else set()
    zone.update(c for c in surrounding_hexes(coord.q, coord.r) if is_on_board(c, radius))
    return zone


def zone_of_control(board: Board, color: Color) -> set[HexCoord]:
    zone: set[HexCoord] = set()
    for coord in board.tiles_of(color):
        zone |= tile_zone(coord, board.radius)
    return zone


def is_surrounded(
    coord: HexCoord,
    enemy_zoc: set[HexCoord],
    radius: int = GRID_RADIUS,
) -> bool:
    """True when no on-board neighbour of *coord* lies outside *enemy_zoc*.

    Off-board neighbours are not an escape route, so a cell with no on-board
    neighbours at all is surrounded.
    """
    for neighbor in surrounding_hexes(coord.q, coord.r):
        if not is_on_board(neighbor, radius):
            continue
        if neighbor not in enemy_zoc:
            return False
    return True
