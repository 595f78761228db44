"""Tests for line-capture, surround-capture and their merge."""

from __future__ import annotations

from src.games.hex_zoc.board import Board
from src.games.hex_zoc.captures import (
    group_batches,
    line_captures,
    merge_captures,
    resolve_captures,
    surround_captures,
)
from src.games.hex_zoc.geometry import surrounding_hexes
from src.games.hex_zoc.types import Capture, CaptureBatch, CaptureRule, Color, HexCoord

W = Color.WHITE
B = Color.BLACK


def _hex(q: int, r: int) -> HexCoord:
    return HexCoord(q=q, r=r)


def _board(white: list[tuple[int, int]], black: list[tuple[int, int]]) -> Board:
    board = Board()
    for q, r in white:
        board.set_owner(_hex(q, r), W)
    for q, r in black:
        board.set_owner(_hex(q, r), B)
    return board


def _cells(captures: list[Capture]) -> list[HexCoord]:
    return [c.coord for c in captures]


class TestLineCaptures:
    def test_bracketed_run_flips(self) -> None:
        board = _board(white=[(0, 0)], black=[(1, 0), (2, 0)])
        board.place(_hex(3, 0), W)

        captures = line_captures(board, _hex(3, 0), W)

        assert _cells(captures) == [_hex(2, 0), _hex(1, 0)]
        assert all(c.rank == 1 for c in captures)
        assert all(c.rule == CaptureRule.LINE for c in captures)

    def test_run_ending_on_empty_does_not_flip(self) -> None:
        board = _board(white=[], black=[(1, 0), (2, 0)])
        board.place(_hex(0, 0), W)
        assert line_captures(board, _hex(0, 0), W) == []

    def test_run_ending_at_edge_does_not_flip(self) -> None:
        board = _board(white=[], black=[(6, 0), (7, 0)])
        board.place(_hex(5, 0), W)
        assert line_captures(board, _hex(5, 0), W) == []

    def test_adjacent_own_tile_flips_nothing(self) -> None:
        board = _board(white=[(1, 0)], black=[])
        board.place(_hex(0, 0), W)
        assert line_captures(board, _hex(0, 0), W) == []

    def test_directions_are_independent(self) -> None:
        # East run is bracketed, west run is open
        board = _board(white=[(2, 0)], black=[(1, 0), (-1, 0)])
        board.place(_hex(0, 0), W)

        assert _cells(line_captures(board, _hex(0, 0), W)) == [_hex(1, 0)]

    def test_several_directions_at_once(self) -> None:
        board = _board(
            white=[(2, 0), (0, -2), (-2, 2)],
            black=[(1, 0), (0, -1), (-1, 1)],
        )
        board.place(_hex(0, 0), W)

        assert set(_cells(line_captures(board, _hex(0, 0), W))) == {
            _hex(1, 0), _hex(0, -1), _hex(-1, 1),
        }


class TestSurroundCaptures:
    def test_lone_tile_ringed_by_enemy(self) -> None:
        ring = [(c.q, c.r) for c in surrounding_hexes(0, 0)]
        board = _board(white=ring, black=[(0, 0)])
        board.place(_hex(5, 0), W)

        captures = surround_captures(board, W)

        assert captures == [Capture(coord=_hex(0, 0), rank=1, rule=CaptureRule.SURROUND)]

    def test_zone_not_tiles_is_enough(self) -> None:
        # Two white tiles project a zone over every neighbour of (0, 0)
        board = _board(white=[(1, -1), (-1, 1)], black=[(0, 0)])
        assert _cells(surround_captures(board, W)) == [_hex(0, 0)]

    def test_gap_in_zone_saves_tile(self) -> None:
        board = _board(white=[(1, -1)], black=[(0, 0)])
        assert surround_captures(board, W) == []

    def test_straight_runs_follow_with_increasing_rank(self) -> None:
        board = _board(white=[(1, -1), (-1, 1)], black=[(0, 0), (1, 0), (-1, 0)])

        captures = surround_captures(board, W)

        # East run is walked before the west run
        assert [(c.coord, c.rank) for c in captures] == [
            (_hex(0, 0), 1),
            (_hex(1, 0), 2),
            (_hex(-1, 0), 3),
        ]

    def test_long_run_ranks_walk_outward(self) -> None:
        board = _board(
            white=[(1, -1), (-1, 1)],
            black=[(0, 0), (1, 0), (2, 0), (3, 0)],
        )

        captures = surround_captures(board, W)

        assert [(c.coord, c.rank) for c in captures] == [
            (_hex(0, 0), 1),
            (_hex(1, 0), 2),
            (_hex(2, 0), 3),
            (_hex(3, 0), 4),
        ]

    def test_corner_tile_with_clipped_neighbourhood(self) -> None:
        board = _board(white=[(6, 0)], black=[(7, 0)])
        # (6, 0) covers (7, 0), (7, -1), (6, 1) and itself: every on-board
        # neighbour of the corner
        assert _cells(surround_captures(board, W)) == [_hex(7, 0)]

    def test_own_tiles_never_captured(self) -> None:
        ring = [(c.q, c.r) for c in surrounding_hexes(0, 0)]
        board = _board(white=[(0, 0)], black=ring)
        assert surround_captures(board, W) == []


class TestMerge:
    def test_line_entry_wins_over_surround(self) -> None:
        line = [Capture(coord=_hex(1, 0), rank=1, rule=CaptureRule.LINE)]
        surround = [
            Capture(coord=_hex(0, 0), rank=1, rule=CaptureRule.SURROUND),
            Capture(coord=_hex(1, 0), rank=2, rule=CaptureRule.SURROUND),
        ]

        merged = merge_captures(line, surround)

        assert merged == [
            Capture(coord=_hex(1, 0), rank=1, rule=CaptureRule.LINE),
            Capture(coord=_hex(0, 0), rank=1, rule=CaptureRule.SURROUND),
        ]

    def test_first_surround_entry_kept(self) -> None:
        surround = [
            Capture(coord=_hex(2, 0), rank=3, rule=CaptureRule.SURROUND),
            Capture(coord=_hex(2, 0), rank=1, rule=CaptureRule.SURROUND),
        ]
        assert merge_captures([], surround) == [surround[0]]

    def test_cell_taken_by_both_rules_appears_once(self) -> None:
        # (1, 0) is bracketed by (0, 0) and (2, 0), and both white tiles'
        # zones cover all of its neighbours
        board = _board(white=[(0, 0)], black=[(1, 0)])
        board.place(_hex(2, 0), W)

        assert _cells(line_captures(board, _hex(2, 0), W)) == [_hex(1, 0)]
        assert _cells(surround_captures(board, W)) == [_hex(1, 0)]

        merged = resolve_captures(board, _hex(2, 0), W)
        assert merged == [Capture(coord=_hex(1, 0), rank=1, rule=CaptureRule.LINE)]

    def test_line_rank_beats_surround_follower_rank(self) -> None:
        board = _board(
            white=[(1, -1), (-1, 1), (2, 0)],
            black=[(0, 0), (1, 0), (-1, 0)],
        )
        board.place(_hex(-2, 0), W)

        merged = resolve_captures(board, _hex(-2, 0), W)

        assert sorted(_cells(merged), key=lambda c: (c.q, c.r)) == [
            _hex(-1, 0), _hex(0, 0), _hex(1, 0),
        ]
        assert all(c.rank == 1 and c.rule == CaptureRule.LINE for c in merged)


class TestGroupBatches:
    def test_empty(self) -> None:
        assert group_batches([]) == []

    def test_grouped_by_ascending_rank(self) -> None:
        captures = [
            Capture(coord=_hex(3, 0), rank=3, rule=CaptureRule.SURROUND),
            Capture(coord=_hex(0, 0), rank=1, rule=CaptureRule.LINE),
            Capture(coord=_hex(2, 0), rank=2, rule=CaptureRule.SURROUND),
            Capture(coord=_hex(0, 1), rank=1, rule=CaptureRule.SURROUND),
        ]

        assert group_batches(captures) == [
            CaptureBatch(rank=1, cells=[_hex(0, 0), _hex(0, 1)]),
            CaptureBatch(rank=2, cells=[_hex(2, 0)]),
            CaptureBatch(rank=3, cells=[_hex(3, 0)]),
        ]
