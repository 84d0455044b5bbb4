"""Unit tests for /src/formation/connectivity.py"""

import random

import pytest

from src.formation.board import Board
from src.formation.cell import Cell
from src.formation.connectivity import (
    is_connected,
    is_connected_after_move,
    is_connected_after_placement,
)
from src.formation.moves import Move


def reachable_from(seed: Cell, cells: set[Cell]) -> set[Cell]:
    """Slow but obviously correct: keep growing the reached set until nothing touches it anymore"""
    reached = {seed}
    grown = True
    while grown:
        grown = False
        for cell in cells - reached:
            if any(cell.is_adjacent(other) for other in reached):
                reached.add(cell)
                grown = True
    return reached


@pytest.mark.parametrize("cells", [[], [Cell(7, -3)]])
def test_zero_or_one_cell_is_connected(cells: list[Cell]) -> None:
    assert is_connected(cells)


@pytest.mark.parametrize(
    "cells, expected",
    [
        ([Cell(0, 0), Cell(1, 0)], True),
        ([Cell(0, 0), Cell(1, 1)], True),  # corners count
        ([Cell(0, 0), Cell(2, 0)], False),
        ([Cell(0, 0), Cell(1, 1), Cell(2, 2), Cell(3, 1), Cell(4, 0)], True),
        ([Cell(0, 0), Cell(1, 0), Cell(5, 5), Cell(6, 5)], False),
    ],
)
def test_is_connected(cells: list[Cell], expected: bool) -> None:
    assert is_connected(cells) is expected


def test_is_connected_does_not_change_input() -> None:
    cells = {Cell(0, 0), Cell(3, 3)}
    is_connected(cells)
    assert cells == {Cell(0, 0), Cell(3, 3)}


@pytest.mark.parametrize("seed", range(25))
def test_is_connected_matches_reachability_from_any_cell(seed: int) -> None:
    """Random clusters: connected exactly when a search from any cell reaches every cell"""
    rng = random.Random(seed)
    cells = {Cell(rng.randint(-3, 3), rng.randint(-3, 3)) for _ in range(rng.randint(2, 12))}
    for start in cells:
        assert is_connected(cells) is (reachable_from(start, cells) == cells)


# --- HYPOTHETICAL CHANGES ---
def test_placement_next_to_formation() -> None:
    board = Board.from_text("Kk")
    assert is_connected_after_placement(board, Cell(2, 1))
    assert not is_connected_after_placement(board, Cell(3, 0))


def test_placement_that_bridges_two_clusters() -> None:
    """Board itself is split, but the new piece joins both halves"""
    board = Board.from_text("K.k")
    assert is_connected_after_placement(board, Cell(1, 0))
    assert not is_connected_after_placement(board, Cell(5, 0))


def test_placement_on_empty_board() -> None:
    assert is_connected_after_placement(Board(), Cell(100, 100))


def test_move_keeping_contact() -> None:
    board = Board.from_text("KPk")
    assert is_connected_after_move(board, Move(Cell(1, 0), Cell(1, 1)))


def test_move_breaking_contact() -> None:
    """Taking the middle piece away splits the formation"""
    board = Board.from_text("KPk")
    assert not is_connected_after_move(board, Move(Cell(1, 0), Cell(1, 2)))


def test_capture_frees_the_origin_cell() -> None:
    """Rook takes the king next to it: only (0,0) and (2,0) stay occupied"""
    board = Board.from_text("KRk")
    assert not is_connected_after_move(board, Move(Cell(1, 0), Cell(2, 0)))

    supported = Board.from_text(
        """
        KRk
        .P.
        """
    )
    assert is_connected_after_move(supported, Move(Cell(1, 0), Cell(2, 0)))


def test_hypothetical_checks_leave_board_alone() -> None:
    board = Board.from_text("KPk")
    before = dict(board.position)
    is_connected_after_move(board, Move(Cell(1, 0), Cell(1, 5)))
    is_connected_after_placement(board, Cell(9, 9))
    assert board.position == before
