"""Domain models for Hex Zone Control."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

GRID_RADIUS = 8
TILES_PER_PLAYER = 20


class Color(str, Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> Color:
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def label(self) -> str:
        return self.value.capitalize()


# Axial hex directions, in scan order: E, NE, NW, W, SW, SE
HEX_DIRECTIONS: list[tuple[int, int]] = [
    (1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1),
]

# Index of the reverse direction for each entry of HEX_DIRECTIONS
OPPOSITE: list[int] = [3, 4, 5, 0, 1, 2]


class HexCoord(BaseModel):
    """Axial coordinate of a single cell; s is derived so that q + r + s == 0."""

    model_config = ConfigDict(frozen=True)

    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r

    @property
    def cube(self) -> tuple[int, int, int]:
        return (self.q, self.r, self.s)

    def to_key(self) -> str:
        return f"{self.q},{self.r}"

    @staticmethod
    def from_key(key: str) -> HexCoord:
        q, r = key.split(",")
        return HexCoord(q=int(q), r=int(r))

    def step(self, direction: int, distance: int = 1) -> HexCoord:
        dq, dr = HEX_DIRECTIONS[direction]
        return HexCoord(q=self.q + dq * distance, r=self.r + dr * distance)

    def __str__(self) -> str:
        return f"({self.q}, {self.r})"


class CaptureRule(str, Enum):
    LINE = "line"          # bracketed between two tiles of the capturing colour
    SURROUND = "surround"  # every on-board neighbour inside the enemy zone


class Capture(BaseModel):
    """A single tile flip, tagged with its reveal rank."""

    model_config = ConfigDict(frozen=True)

    coord: HexCoord
    rank: int
    rule: CaptureRule


class CaptureBatch(BaseModel):
    """All flips revealed together at one rank."""

    rank: int
    cells: list[HexCoord] = Field(default_factory=list)


class Outcome(BaseModel):
    """Final result, derived from tile counts on the board."""

    counts: dict[Color, int]
    winner: Color | None = None

    @property
    def is_tie(self) -> bool:
        return self.winner is None

    def describe(self) -> str:
        white = self.counts.get(Color.WHITE, 0)
        black = self.counts.get(Color.BLACK, 0)
        if self.winner is None:
            return f"Tie {white}-{black}"
        return f"{self.winner.label} wins {white}-{black}"
