"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/store layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the store, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
CellKey = str  # "x,y"
PieceSymbol = str  # "K" (Red king) ... "p" (Blue pawn)
PlayerName = str
PieceTypeName = str


@dataclass
class GameModel:
    """Transport-safe representation of a game used between API, Service, store, and Game layers."""

    phase: str
    current_player: PlayerName
    position: dict[CellKey, PieceSymbol]
    rosters: dict[PlayerName, list[PieceTypeName]]
    pending_piece: Optional[PieceTypeName] = None
    selected_cell: Optional[CellKey] = None
    message: Optional[str] = None
    # derived values, filled in by the Game for convenience of the layers above. Ignored when rebuilding a Game.
    status: str = ""
    legal_destinations: list[CellKey] = field(default_factory=list)
    winner: Optional[PlayerName] = None
