"""Defines the pieces and the two players that own them"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Player(Enum):
    """Turn order follows definition order: Red always starts."""

    RED = auto()
    BLUE = auto()

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @property
    def opponent(self) -> "Player":
        return Player.BLUE if self == Player.RED else Player.RED


SYMBOL_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_SYMBOL: dict[PieceType, str] = {
    value: key for key, value in SYMBOL_TO_PIECE.items()
}


@dataclass(frozen=True)
class Piece:
    """A piece never changes: moving it means taking it off one cell and putting an equal piece on another."""

    type: PieceType
    owner: Player

    @classmethod
    def from_symbol(cls, character: str) -> Self:
        # upper case: Red pieces, lower case: Blue pieces
        owner = Player.RED if character.isupper() else Player.BLUE
        piece_type = SYMBOL_TO_PIECE[character.lower()]
        return cls(piece_type, owner)

    def to_symbol(self) -> str:
        return (
            PIECE_TO_SYMBOL[self.type].upper()
            if self.owner == Player.RED
            else PIECE_TO_SYMBOL[self.type]
        )

    def is_opponent_of(self, player: Player) -> bool:
        return self.owner != player
