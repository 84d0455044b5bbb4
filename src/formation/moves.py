"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the move sets for each piece type.


Whether a move keeps the formation in one piece is checked later by the Game (see connectivity.py)
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from src.formation.cell import Cell, Vector
from src.formation.pieces import Piece, PieceType

# The board is unbounded. Sliding pieces stop looking after this many steps along a ray.
SLIDE_LIMIT = 100

ORTHOGONALS: list[Vector] = [(0, 1), (0, -1), (1, 0), (-1, 0)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
]
KING_DELTAS: list[Vector] = ORTHOGONALS + DIAGONALS


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, cell: Cell) -> Optional[Piece]: ...


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_cell: Cell
    to_cell: Cell


# --- MOVEMENT RULES ---
def raycasting_move(cell: Cell, board: Board, directions: list[Vector]) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    Walk along each direction one cell at a time:
    * empty cell: can land there, keep walking.
    * opponent's piece: can capture it, the ray ends there.
    * own piece: cannot land there, but it does NOT block. Keep walking past it.

    ---
    There is no edge of the board, so every ray is cut off after SLIDE_LIMIT steps.
    """
    player = _mover(cell, board).owner

    moves: list[Move] = []
    for dx, dy in directions:
        target_cell = cell
        for _ in range(SLIDE_LIMIT):
            target_cell = target_cell.offset(dx, dy)
            piece_found = board.piece(target_cell)

            if piece_found is None:
                moves.append(Move(from_cell=cell, to_cell=target_cell))
                continue

            if piece_found.is_opponent_of(player):
                moves.append(Move(from_cell=cell, to_cell=target_cell))
                break

            # own piece: see-through
    return moves


def single_step_move(cell: Cell, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that land on a fixed offset: empty or opponent's piece"""
    player = _mover(cell, board).owner

    moves: list[Move] = []
    for dx, dy in deltas:
        target_cell = cell.offset(dx, dy)
        piece_found = board.piece(target_cell)
        if piece_found is None or piece_found.is_opponent_of(player):
            moves.append(Move(from_cell=cell, to_cell=target_cell))
    return moves


def candidate_pawn_moves(cell: Cell, board: Board) -> list[Move]:
    """
    A pawn:
    - steps one cell orthogonally (in any of the 4 directions), only onto an empty cell
    - takes diagonally (in any of the 4 directions), never steps diagonally onto an empty cell
    """
    player = _mover(cell, board).owner

    moves: list[Move] = []
    for dx, dy in ORTHOGONALS:
        target_cell = cell.offset(dx, dy)
        if board.piece(target_cell) is None:
            moves.append(Move(from_cell=cell, to_cell=target_cell))

    for dx, dy in DIAGONALS:
        target_cell = cell.offset(dx, dy)
        piece_found = board.piece(target_cell)
        if piece_found is not None and piece_found.is_opponent_of(player):
            moves.append(Move(from_cell=cell, to_cell=target_cell))
    return moves


def candidate_knight_moves(cell: Cell, board: Board) -> list[Move]:
    """Knights always move such that |dx| + |dy| = 3 (and neither is zero)"""
    return single_step_move(cell, board, KNIGHT_DELTAS)


def candidate_bishop_moves(cell: Cell, board: Board) -> list[Move]:
    """Bishops move diagonally: |dx| = |dy|"""
    return raycasting_move(cell, board, DIAGONALS)


def candidate_rook_moves(cell: Cell, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(cell, board, ORTHOGONALS)


def candidate_queen_moves(cell: Cell, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(cell, board, ORTHOGONALS + DIAGONALS)


def candidate_king_moves(cell: Cell, board: Board) -> list[Move]:
    """The king can move by a single cell at the time. No sliding."""
    return single_step_move(cell, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Cell, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def candidate_moves(cell: Cell, board: Board) -> list[Move]:
    """Look up the movement rule of whatever piece stands on the cell."""
    movement_rule = MOVEMENT_RULES[_mover(cell, board).type]
    return movement_rule(cell, board)


def _mover(cell: Cell, board: Board) -> Piece:
    piece = board.piece(cell)
    if piece is None:
        raise ValueError(f"No piece to move on {cell}.")
    return piece
