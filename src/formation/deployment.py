"""
Deployment phase
-----

Before any piece moves, both players take turns putting their pieces on the board, one at the time.

* Every player starts with the same roster of pieces.
* The King has to be the last piece you put down.
* Except for the very first piece of the game, a new piece has to touch the formation (see connectivity.py).
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import (
    ContinuityError,
    GameStateError,
    PlacementError,
    SelectionError,
)
from src.formation.board import Board
from src.formation.cell import Cell
from src.formation.pieces import Piece, PieceType, Player

RosterComposition = dict[PieceType, int]

# Also the order in which a roster lists its pieces
STARTING_ROSTER: RosterComposition = {
    PieceType.QUEEN: 1,
    PieceType.ROOK: 2,
    PieceType.BISHOP: 2,
    PieceType.KNIGHT: 2,
    PieceType.PAWN: 2,
    PieceType.KING: 1,
}


@dataclass
class Roster:
    """The pieces one player still has to place (a multiset of piece types)."""

    pieces: list[PieceType] = field(default_factory=list)

    @classmethod
    def from_composition(cls, composition: RosterComposition) -> Self:
        if any(count < 0 for count in composition.values()):
            raise GameStateError(f"Roster cannot contain negative counts: {composition}")
        pieces = [
            piece_type
            for piece_type, count in composition.items()
            for _ in range(count)
        ]
        if not pieces:
            raise GameStateError("Roster must contain at least one piece.")
        return cls(pieces)

    def __len__(self) -> int:
        return len(self.pieces)

    def __contains__(self, piece_type: PieceType) -> bool:
        return piece_type in self.pieces

    def is_empty(self) -> bool:
        return not self.pieces

    def counts(self) -> dict[PieceType, int]:
        return dict(Counter(self.pieces))

    def is_selectable(self, piece_type: PieceType) -> bool:
        """The King only becomes available once it is the only piece left."""
        if piece_type == PieceType.KING and len(self) > 1:
            return False
        return piece_type in self

    def remove(self, piece_type: PieceType) -> None:
        """Take out a single instance of the piece type"""
        self.pieces.remove(piece_type)


@dataclass
class Deployment:
    rosters: dict[Player, Roster]
    # piece picked from the roster, waiting to be put on the board
    pending: Optional[Piece] = None

    @classmethod
    def start(cls, composition: Optional[RosterComposition] = None) -> Self:
        composition = composition if composition is not None else STARTING_ROSTER
        return cls(
            rosters={player: Roster.from_composition(composition) for player in Player}
        )

    def roster(self, player: Player) -> Roster:
        return self.rosters[player]

    def is_complete(self) -> bool:
        """All pieces of both players are on the board"""
        return all(roster.is_empty() for roster in self.rosters.values())

    def select(self, player: Player, piece_type: PieceType) -> None:
        """Pick the next piece to put on the board."""
        roster = self.roster(player)
        if not roster.is_selectable(piece_type):
            if piece_type == PieceType.KING and len(roster) > 1:
                raise SelectionError("The King must be placed last.")
            raise SelectionError(f"No {piece_type.name.lower()} left to place.")

        self.pending = Piece(piece_type, player)

    def place(self, board: Board, cell: Cell, player: Player) -> Piece:
        """
        Put the pending piece on the board
        ----

        1. There must be a piece selected (by the player to move)
        2. The cell must be empty
        3. Unless this is the very first piece, the formation must stay connected (if not: the selection is dropped)
        4. Place the piece, strike it off the roster.
        """
        if self.pending is None or self.pending.owner != player:
            raise PlacementError("Select a piece to place first.")

        if board.is_occupied(cell):
            raise PlacementError("That cell is already occupied.")

        if not board.is_empty() and not board.keeps_connected_after_placement(cell):
            self.pending = None
            raise ContinuityError("Placement must be adjacent to existing pieces.")

        piece = self.pending
        board.place_piece(piece, cell)
        self.roster(player).remove(piece.type)
        self.pending = None
        return piece
