"""The Game board keeps track of the `position` (the occupancy map: which piece stands on which cell)"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.formation.cell import Cell
from src.formation.connectivity import (
    is_connected,
    is_connected_after_move,
    is_connected_after_placement,
)
from src.formation.moves import Move, candidate_moves
from src.formation.pieces import Piece, PieceType, Player

EMPTY_CELL = "."


@dataclass
class Board:
    # Sparse: only occupied cells are stored. The board has no edges.
    position: dict[Cell, Piece] = field(default_factory=dict)

    @classmethod
    def from_text(cls, diagram: str, origin: Cell = Cell(0, 0)) -> Self:
        """Construct a board from a small text diagram.

        One line per row, y grows downwards (like on screen). The top left character sits on `origin`.
        ex.
        .Kq
        RP.
        means:
        * a red king on (1, 0) and a blue queen on (2, 0)
        * a red rook on (0, 1) and a red pawn on (1, 1)

        Upper case letters are Red's pieces, lower case letters are Blue's (KQRBNP, like FEN).
        """
        position: dict[Cell, Piece] = {}
        rows = [row.strip() for row in diagram.strip().splitlines()]
        for dy, row in enumerate(rows):
            for dx, character in enumerate(row):
                if character == EMPTY_CELL:
                    continue
                position[origin.offset(dx, dy)] = Piece.from_symbol(character)
        return cls(position)

    def to_text(self) -> str:
        """Inverse of from_text, drawing the smallest rectangle around all pieces."""
        if not self.position:
            return ""
        min_x, min_y, max_x, max_y = self.bounds()
        rows: list[str] = []
        for y in range(min_y, max_y + 1):
            row = ""
            for x in range(min_x, max_x + 1):
                piece = self.piece(Cell(x, y))
                row += piece.to_symbol() if piece else EMPTY_CELL
            rows.append(row)
        return "\n".join(rows)

    def bounds(self) -> tuple[int, int, int, int]:
        """(min x, min y, max x, max y) of the occupied cells"""
        xs = [cell.x for cell in self.position]
        ys = [cell.y for cell in self.position]
        return min(xs), min(ys), max(xs), max(ys)

    def piece(self, cell: Cell) -> Optional[Piece]:
        return self.position.get(cell)

    def is_occupied(self, cell: Cell) -> bool:
        return cell in self.position

    def is_empty(self) -> bool:
        return not self.position

    def occupied_cells(self) -> set[Cell]:
        return set(self.position)

    def locate_pieces(self, piece_type: PieceType) -> list[Cell]:
        return [cell for cell, piece in self.position.items() if piece.type == piece_type]

    def locate_player(self, player: Player) -> list[Cell]:
        return [cell for cell, piece in self.position.items() if piece.owner == player]

    def kings(self) -> list[Piece]:
        """Convenience method: the end of the game is decided by counting these"""
        return [self.position[cell] for cell in self.locate_pieces(PieceType.KING)]

    # --- RULES ---
    def candidate_moves(self, cell: Cell) -> list[Move]:
        """Moves allowed by the movement rule of the piece on the cell. Does NOT check connectivity."""
        return candidate_moves(cell, self)

    def destinations(self, cell: Cell) -> list[Cell]:
        return [move.to_cell for move in self.candidate_moves(cell)]

    def is_connected(self) -> bool:
        return is_connected(self.position)

    def keeps_connected_after_placement(self, cell: Cell) -> bool:
        return is_connected_after_placement(self, cell)

    def keeps_connected_after_move(self, move: Move) -> bool:
        return is_connected_after_move(self, move)

    # --- UPDATES ---
    def place_piece(self, piece: Piece, cell: Cell) -> None:
        if self.is_occupied(cell):
            raise ValueError(f"Cannot place {piece} on {cell}: already occupied.")
        self.position[cell] = piece

    def move_piece(self, move: Move) -> Optional[Piece]:
        """Update the position on the board. Returns the captured piece (if any)."""
        piece_that_moved = self.position.pop(move.from_cell)
        captured_piece = self.position.get(move.to_cell)
        self.position[move.to_cell] = piece_that_moved
        return captured_piece
