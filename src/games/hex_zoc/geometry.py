"""Hex grid geometry: bounds, adjacency and pixel mapping.

The board is a hexagon of radius N in axial coordinates: a cell (q, r) is on
the board when |q|, |r| and |s| are all strictly below N, with s = -q - r.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache

from src.games.hex_zoc.types import GRID_RADIUS, HEX_DIRECTIONS, HexCoord

SQRT3 = math.sqrt(3)


def is_valid_hex(q: int, r: int, radius: int = GRID_RADIUS) -> bool:
    s = -q - r
    return abs(q) < radius and abs(r) < radius and abs(s) < radius


def is_on_board(coord: HexCoord, radius: int = GRID_RADIUS) -> bool:
    return is_valid_hex(coord.q, coord.r, radius)


@lru_cache(maxsize=None)
def all_valid_hexes(radius: int = GRID_RADIUS) -> tuple[HexCoord, ...]:
    """Every cell on a board of the given radius, ordered by q then r."""
    return tuple(
        HexCoord(q=q, r=r)
        for q in range(-(radius - 1), radius)
        for r in range(-(radius - 1), radius)
        if is_valid_hex(q, r, radius)
    )


def surrounding_hexes(q: int, r: int) -> list[HexCoord]:
    """All 6 adjacent cells, including ones that fall off the board."""
    return [HexCoord(q=q + dq, r=r + dr) for dq, dr in HEX_DIRECTIONS]


def neighbors(q: int, r: int, radius: int = GRID_RADIUS) -> list[HexCoord]:
    """The adjacent cells that lie on the board."""
    return [c for c in surrounding_hexes(q, r) if is_on_board(c, radius)]


def hex_round(q: float, r: float) -> HexCoord:
    """Round fractional axial coordinates to the nearest cell.

    Each cube component is rounded independently; the one with the largest
    rounding error is then recomputed from the other two so that the result
    still satisfies q + r + s == 0.
    """
    s = -q - r

    rq = round(q)
    rr = round(r)
    rs = round(s)

    q_diff = abs(rq - q)
    r_diff = abs(rr - r)
    s_diff = abs(rs - s)

    if q_diff > r_diff and q_diff > s_diff:
        rq = -rr - rs
    elif r_diff > s_diff:
        rr = -rq - rs

    return HexCoord(q=int(rq), r=int(rr))


@dataclass(frozen=True)
class HexLayout:
    """Maps cells to screen positions around an origin pixel."""

    size: float
    origin_x: float = 0.0
    origin_y: float = 0.0

    def hex_to_pixel(self, coord: HexCoord) -> tuple[float, float]:
        x = self.size * (SQRT3 * coord.q + SQRT3 / 2 * coord.r)
        y = self.size * (3 / 2 * coord.r)
        return self.origin_x + x, self.origin_y + y

    def pixel_to_hex(self, x: float, y: float) -> HexCoord:
        px = x - self.origin_x
        py = y - self.origin_y

        q = (SQRT3 / 3 * px - 1 / 3 * py) / self.size
        r = (2 / 3 * py) / self.size

        return hex_round(q, r)
