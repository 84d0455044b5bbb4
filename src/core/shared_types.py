"""
Type definitions used across layers
"""

from enum import StrEnum


class Phase(StrEnum):
    DEPLOYMENT = "deployment"
    GAMEPLAY = "gameplay"
    ENDED = "ended"


# --- PlayerColor and PieceType mirror the domain enums in src/formation/pieces.py
# --- NOTE: these are the string versions that travel across the API boundary.


class PlayerColor(StrEnum):
    RED = "red"
    BLUE = "blue"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
