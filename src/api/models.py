"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Phase, PieceType, PlayerColor


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    # None: play with the standard roster
    roster: Optional[dict[PieceType, int]] = None

    @field_validator("roster")
    @classmethod
    def validate_roster(
        cls, value: Optional[dict[PieceType, int]]
    ) -> Optional[dict[PieceType, int]]:
        if value is None:
            return value

        if any(count < 0 for count in value.values()):
            raise InvalidRequestError("Roster counts cannot be negative.")
        if sum(value.values()) == 0:
            raise InvalidRequestError("Roster must contain at least one piece.")
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class SelectRosterPieceRequest(BaseModel):
    game_id: UUID
    player: PlayerColor
    piece_type: PieceType


class CellRequest(BaseModel):
    """Clicking a cell: placing a piece (deployment) or selecting/moving one (gameplay)"""

    game_id: UUID
    x: int
    y: int


class PlacePieceRequest(CellRequest):
    pass


class BoardActionRequest(CellRequest):
    pass


# --- RESPONSE MODELS ---
class CellResponse(BaseModel):
    x: int
    y: int


class PlacedPieceResponse(BaseModel):
    x: int
    y: int
    type: PieceType
    owner: PlayerColor


class GameResponse(BaseModel):
    game_id: UUID
    phase: Phase
    current_player: PlayerColor
    pieces: list[PlacedPieceResponse]
    rosters: dict[PlayerColor, dict[PieceType, int]]
    selected_piece_type: Optional[PieceType]
    selected_cell: Optional[CellResponse]
    legal_destinations: list[CellResponse]
    status: str
    winner: Optional[PlayerColor]
