"""Capture rules: line-capture, surround-capture and how they merge.

Both rules read the same board snapshot, taken after the new tile is placed
and before anything flips. Resolution runs once per placement; flips produced
here never trigger further captures.
"""

from __future__ import annotations

from src.games.hex_zoc.board import Board
from src.games.hex_zoc.types import (
    HEX_DIRECTIONS,
    Capture,
    CaptureBatch,
    CaptureRule,
    Color,
    HexCoord,
)
from src.games.hex_zoc.zoc import is_surrounded, zone_of_control


def _run(board: Board, start: HexCoord, direction: int, owner: Color) -> tuple[list[HexCoord], HexCoord]:
    """Walk from *start* (exclusive) while cells belong to *owner*.

    Returns the run and the first cell past it (which may be off the board).
    """
    run: list[HexCoord] = []
    cell = start.step(direction)
    while board.is_valid(cell) and board.occupant(cell) == owner:
        run.append(cell)
        cell = cell.step(direction)
    return run, cell


def line_captures(board: Board, placed: HexCoord, color: Color) -> list[Capture]:
    """Opponent runs bracketed between *placed* and another tile of *color*."""
    opponent = color.opponent
    captures: list[Capture] = []

    for direction in range(len(HEX_DIRECTIONS)):
        run, end = _run(board, placed, direction, opponent)
        if not run:
            continue
        if board.is_valid(end) and board.occupant(end) == color:
            captures.extend(
                Capture(coord=coord, rank=1, rule=CaptureRule.LINE) for coord in run
            )

    return captures


def surround_captures(board: Board, color: Color) -> list[Capture]:
    """Opponent tiles encircled by *color*'s zone, plus their straight runs.

    The encircled tile flips at rank 1. Its same-colour neighbours along each
    of the 6 directions follow, the runs concatenated in direction order and
    ranked 2, 3, ... in that order.
    """
    opponent = color.opponent
    zone = zone_of_control(board, color)
    captures: list[Capture] = []

    for tile in board.tiles_of(opponent):
        if not is_surrounded(tile, zone, board.radius):
            continue

        captures.append(Capture(coord=tile, rank=1, rule=CaptureRule.SURROUND))

        followers: list[HexCoord] = []
        for direction in range(len(HEX_DIRECTIONS)):
            run, _end = _run(board, tile, direction, opponent)
            followers.extend(run)

        captures.extend(
            Capture(coord=coord, rank=idx + 2, rule=CaptureRule.SURROUND)
            for idx, coord in enumerate(followers)
        )

    return captures


def merge_captures(line: list[Capture], surround: list[Capture]) -> list[Capture]:
    """One entry per cell; whichever rule recorded a cell first keeps it.

    Line-captures go in first, so they win over surround-captures.
    """
    merged: dict[HexCoord, Capture] = {}
    for capture in [*line, *surround]:
        if capture.coord not in merged:
            merged[capture.coord] = capture
    return list(merged.values())


def resolve_captures(board: Board, placed: HexCoord, color: Color) -> list[Capture]:
    """Every flip caused by *color* having just placed at *placed*."""
    return merge_captures(
        line_captures(board, placed, color),
        surround_captures(board, color),
    )


def group_batches(captures: list[Capture]) -> list[CaptureBatch]:
    """Group flips by rank, lowest rank first."""
    by_rank: dict[int, list[HexCoord]] = {}
    for capture in captures:
        by_rank.setdefault(capture.rank, []).append(capture.coord)
    return [
        CaptureBatch(rank=rank, cells=by_rank[rank])
        for rank in sorted(by_rank)
    ]
