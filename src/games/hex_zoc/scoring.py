"""Scoring for Hex Zone Control — one point per tile on the board."""

from __future__ import annotations

from src.games.hex_zoc.board import Board
from src.games.hex_zoc.types import Color, Outcome


def decide_outcome(counts: dict[Color, int]) -> Outcome:
    """Strict majority of tiles wins; equal counts are a tie."""
    white = counts.get(Color.WHITE, 0)
    black = counts.get(Color.BLACK, 0)

    winner: Color | None = None
    if white > black:
        winner = Color.WHITE
    elif black > white:
        winner = Color.BLACK

    return Outcome(counts={Color.WHITE: white, Color.BLACK: black}, winner=winner)


def final_outcome(board: Board) -> Outcome:
    return decide_outcome(board.tile_counts())
