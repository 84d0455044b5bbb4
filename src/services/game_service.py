"""Orchestration of communication from the presentation layer to business logic and the game store (and the reverse direction)."""

import logging
from collections import Counter
from typing import Callable, Optional
from uuid import UUID

from src.api.models import (
    BoardActionRequest,
    CellResponse,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    PlacedPieceResponse,
    PlacePieceRequest,
    SelectRosterPieceRequest,
)
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Phase, PieceType, PlayerColor
from src.db.repository import GameRepository
from src.formation.cell import Cell
from src.formation.game import Game
from src.formation.pieces import Piece
from src.formation.pieces import PieceType as DomainPieceType
from src.formation.pieces import Player

logger = logging.getLogger(__name__)


class GameService:
    """Orchestration of layers for a game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- Inbound actions ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a fresh game: empty board, full rosters."""

        roster = (
            {DomainPieceType[t.name]: count for t, count in request.roster.items()}
            if request.roster is not None
            else None
        )
        new_game = Game.new_game(roster=roster)
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """Retrieve current game state (no action)."""
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def select_roster_piece(self, request: SelectRosterPieceRequest) -> GameResponse:
        """A player picks a piece from their roster during deployment."""
        player = Player[request.player.name]
        piece_type = DomainPieceType[request.piece_type.name]
        return self._play(
            request.game_id, lambda game: game.select_roster_piece(player, piece_type)
        )

    def place_piece(self, request: PlacePieceRequest) -> GameResponse:
        """The player to move puts the selected piece on a cell."""
        cell = Cell(request.x, request.y)
        return self._play(request.game_id, lambda game: game.place_piece(cell))

    def select_or_move(self, request: BoardActionRequest) -> GameResponse:
        """The player to move clicks a cell during gameplay."""
        cell = Cell(request.x, request.y)
        return self._play(request.game_id, lambda game: game.select_or_move(cell))

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _play(self, game_id: UUID, action: Callable[[Game], None]) -> GameResponse:
        """
        1. Retrieve stored GameModel
        2. Rebuild the Game and apply the action (rule violations end up in the status, not as exceptions)
        3. Store and return the new state
        """
        stored_model = self._fetch_game(game_id)
        game = Game.from_model(stored_model)
        action(game)
        after_action = game.to_model()
        self.repo.update_game(game_id, after_action)
        return self._create_game_response(game_id, after_action)

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""

        pieces: list[PlacedPieceResponse] = []
        for key, symbol in model.position.items():
            cell = Cell.from_key(key)
            piece = Piece.from_symbol(symbol)
            pieces.append(
                PlacedPieceResponse(
                    x=cell.x,
                    y=cell.y,
                    type=PieceType[piece.type.name],
                    owner=PlayerColor[piece.owner.name],
                )
            )

        return GameResponse(
            game_id=game_id,
            phase=Phase(model.phase),
            current_player=PlayerColor(model.current_player),
            pieces=pieces,
            rosters={
                PlayerColor(player): {
                    PieceType(piece_type): count
                    for piece_type, count in Counter(roster).items()
                }
                for player, roster in model.rosters.items()
            },
            selected_piece_type=(
                PieceType(model.pending_piece) if model.pending_piece else None
            ),
            selected_cell=_cell_response(model.selected_cell),
            legal_destinations=[
                CellResponse(x=cell.x, y=cell.y)
                for cell in map(Cell.from_key, model.legal_destinations)
            ],
            status=model.status,
            winner=PlayerColor(model.winner) if model.winner else None,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model


def _cell_response(key: Optional[str]) -> Optional[CellResponse]:
    if key is None:
        return None
    cell = Cell.from_key(key)
    return CellResponse(x=cell.x, y=cell.y)
