"""Unit tests for /src/formation/deployment.py"""

import pytest

from src.core.exceptions import (
    ContinuityError,
    GameStateError,
    PlacementError,
    SelectionError,
)
from src.formation.board import Board
from src.formation.cell import Cell
from src.formation.deployment import STARTING_ROSTER, Deployment, Roster
from src.formation.pieces import Piece, PieceType, Player


# -- ROSTER ---
def test_starting_roster() -> None:
    roster = Roster.from_composition(STARTING_ROSTER)
    assert len(roster) == 10
    assert roster.counts() == {
        PieceType.QUEEN: 1,
        PieceType.ROOK: 2,
        PieceType.BISHOP: 2,
        PieceType.KNIGHT: 2,
        PieceType.PAWN: 2,
        PieceType.KING: 1,
    }


@pytest.mark.parametrize(
    "composition",
    [
        {PieceType.KING: -1, PieceType.PAWN: 3},
        {},
        {PieceType.KING: 0},
    ],
)
def test_invalid_roster(composition: dict[PieceType, int]) -> None:
    with pytest.raises(GameStateError):
        Roster.from_composition(composition)


def test_remove_single_instance() -> None:
    roster = Roster.from_composition({PieceType.ROOK: 2, PieceType.KING: 1})
    roster.remove(PieceType.ROOK)
    assert roster.counts() == {PieceType.ROOK: 1, PieceType.KING: 1}


def test_king_selectable_only_when_last() -> None:
    roster = Roster.from_composition({PieceType.PAWN: 2, PieceType.KING: 1})
    assert not roster.is_selectable(PieceType.KING)
    roster.remove(PieceType.PAWN)
    assert not roster.is_selectable(PieceType.KING)
    roster.remove(PieceType.PAWN)
    assert roster.is_selectable(PieceType.KING)


def test_missing_piece_not_selectable() -> None:
    roster = Roster.from_composition({PieceType.PAWN: 1, PieceType.KING: 1})
    assert roster.is_selectable(PieceType.PAWN)
    assert not roster.is_selectable(PieceType.QUEEN)


# -- SELECTION ---
def test_select_piece() -> None:
    deployment = Deployment.start()
    deployment.select(Player.BLUE, PieceType.KNIGHT)
    assert deployment.pending == Piece(PieceType.KNIGHT, Player.BLUE)


def test_select_king_too_early() -> None:
    deployment = Deployment.start()
    with pytest.raises(SelectionError, match="The King must be placed last."):
        deployment.select(Player.RED, PieceType.KING)
    assert deployment.pending is None


def test_select_piece_not_in_roster() -> None:
    deployment = Deployment.start({PieceType.PAWN: 1, PieceType.KING: 1})
    with pytest.raises(SelectionError):
        deployment.select(Player.RED, PieceType.QUEEN)


def test_select_replaces_previous_selection() -> None:
    deployment = Deployment.start()
    deployment.select(Player.RED, PieceType.KNIGHT)
    deployment.select(Player.RED, PieceType.ROOK)
    assert deployment.pending == Piece(PieceType.ROOK, Player.RED)


# -- PLACEMENT ---
def test_first_placement_anywhere() -> None:
    """Empty board: nothing to be adjacent to"""
    deployment = Deployment.start()
    board = Board()
    deployment.select(Player.RED, PieceType.QUEEN)
    placed = deployment.place(board, Cell(-500, 1234), Player.RED)
    assert placed == Piece(PieceType.QUEEN, Player.RED)
    assert board.piece(Cell(-500, 1234)) == placed
    assert deployment.pending is None
    assert PieceType.QUEEN not in deployment.roster(Player.RED)
    assert len(deployment.roster(Player.RED)) == 9


def test_place_without_selection() -> None:
    deployment = Deployment.start()
    with pytest.raises(PlacementError):
        deployment.place(Board(), Cell(0, 0), Player.RED)


def test_place_selection_of_other_player() -> None:
    deployment = Deployment.start()
    deployment.select(Player.BLUE, PieceType.PAWN)
    with pytest.raises(PlacementError):
        deployment.place(Board(), Cell(0, 0), Player.RED)


def test_place_on_occupied_cell() -> None:
    deployment = Deployment.start()
    board = Board.from_text("Q")
    deployment.select(Player.BLUE, PieceType.PAWN)
    with pytest.raises(PlacementError):
        deployment.place(board, Cell(0, 0), Player.BLUE)
    # selection survives: just pick another cell
    assert deployment.pending == Piece(PieceType.PAWN, Player.BLUE)
    assert len(deployment.roster(Player.BLUE)) == 10


def test_place_away_from_formation() -> None:
    deployment = Deployment.start()
    board = Board.from_text("Q")
    deployment.select(Player.BLUE, PieceType.PAWN)
    with pytest.raises(ContinuityError, match="Placement must be adjacent to existing pieces."):
        deployment.place(board, Cell(2, 0), Player.BLUE)
    assert deployment.pending is None
    assert board.position == Board.from_text("Q").position
    assert len(deployment.roster(Player.BLUE)) == 10


def test_deployment_complete() -> None:
    deployment = Deployment.start({PieceType.KING: 1})
    board = Board()
    assert not deployment.is_complete()

    deployment.select(Player.RED, PieceType.KING)
    deployment.place(board, Cell(0, 0), Player.RED)
    assert not deployment.is_complete()

    deployment.select(Player.BLUE, PieceType.KING)
    deployment.place(board, Cell(0, 1), Player.BLUE)
    assert deployment.is_complete()
