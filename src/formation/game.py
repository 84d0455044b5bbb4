"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.

Phases only ever move forward: deployment --> gameplay --> ended.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional, Self

from src.core.exceptions import (
    ContinuityError,
    GameStateError,
    NotYourTurnError,
    PhaseError,
    RuleViolation,
)
from src.core.models import GameModel
from src.formation.board import Board
from src.formation.cell import Cell
from src.formation.deployment import Deployment, Roster, RosterComposition
from src.formation.moves import Move
from src.formation.pieces import Piece, PieceType, Player

logger = logging.getLogger(__name__)


class Phase(Enum):
    DEPLOYMENT = auto()
    GAMEPLAY = auto()
    ENDED = auto()


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    deployment: Deployment
    phase: Phase
    current_player: Player
    selected_cell: Optional[Cell] = None
    message: Optional[str] = None  # last rejected action, shown instead of the regular status

    @classmethod
    def new_game(cls, roster: Optional[RosterComposition] = None) -> Self:
        """Empty board, full rosters, Red to place the first piece."""
        return cls(
            board=Board(),
            deployment=Deployment.start(roster),
            phase=Phase.DEPLOYMENT,
            current_player=Player.RED,
        )

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        phase_name = model.phase.upper()
        if phase_name not in Phase.__members__:
            raise GameStateError(
                f"Invalid phase: {model.phase!r}. \nPick one from {','.join([phase.name.lower() for phase in Phase])}"
            )
        current_player = _parse_player(model.current_player)

        try:
            position = {
                Cell.from_key(key): Piece.from_symbol(symbol)
                for key, symbol in model.position.items()
            }
            rosters = {
                _parse_player(name): Roster([_parse_piece_type(t) for t in pieces])
                for name, pieces in model.rosters.items()
            }
            selected_cell = (
                Cell.from_key(model.selected_cell) if model.selected_cell else None
            )
        except (KeyError, ValueError) as error:
            raise GameStateError(f"Cannot interpret stored game: {error}") from error

        if set(rosters) != set(Player):
            raise GameStateError("Stored game must contain a roster for both players.")

        if selected_cell is not None and selected_cell not in position:
            raise GameStateError(f"Selected cell {model.selected_cell} holds no piece.")

        pending = (
            Piece(_parse_piece_type(model.pending_piece), current_player)
            if model.pending_piece
            else None
        )
        return cls(
            board=Board(position),
            deployment=Deployment(rosters, pending),
            phase=Phase[phase_name],
            current_player=current_player,
            selected_cell=selected_cell,
            message=model.message,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses (incl. the derived values the presentation needs)"""
        pending = self.deployment.pending
        return GameModel(
            phase=self.phase.name.lower(),
            current_player=self.current_player.name.lower(),
            position={
                cell.to_key(): piece.to_symbol()
                for cell, piece in self.board.position.items()
            },
            rosters={
                player.name.lower(): [t.name.lower() for t in roster.pieces]
                for player, roster in self.deployment.rosters.items()
            },
            pending_piece=pending.type.name.lower() if pending else None,
            selected_cell=self.selected_cell.to_key() if self.selected_cell else None,
            message=self.message,
            status=self.status,
            legal_destinations=[cell.to_key() for cell in self.legal_destinations()],
            winner=self.winner.name.lower() if self.winner else None,
        )

    @property
    def is_over(self) -> bool:
        return self.phase == Phase.ENDED

    @property
    def winner(self) -> Optional[Player]:
        """Owner of the last king standing. Nobody wins if no king is left (or the game is not over yet)."""
        if not self.is_over:
            return None
        kings = self.board.kings()
        return kings[0].owner if len(kings) == 1 else None

    @property
    def status(self) -> str:
        """Human readable line the presentation layer shows above the board."""
        if self.is_over:
            winner_name = self.winner.display_name if self.winner else "Nobody"
            return f"{winner_name} Wins! Happy Birthday!"

        if self.message:
            return self.message

        player_name = self.current_player.display_name
        if self.phase == Phase.DEPLOYMENT:
            if self.deployment.roster(self.current_player).is_empty():
                return f"Waiting for {self.current_player.opponent.display_name}..."
            return f"{player_name}, place a piece."
        return f"{player_name}'s Turn"

    def select_roster_piece(self, player: Player, piece_type: PieceType) -> None:
        """Pick a piece from your roster. Does not end your turn."""
        if self.is_over:
            return
        with self._reporting_rule_violations():
            self._assert_phase(Phase.DEPLOYMENT, "Deployment is over.")
            self._assert_your_turn(player)
            self.deployment.select(player, piece_type)

    def place_piece(self, cell: Cell) -> None:
        """
        Put the selected roster piece on the board
        -----

        1. place the piece (the Deployment checks selection, occupancy and connectivity)
        2. hand the turn to the other player
        3. once both rosters are empty --> gameplay starts
        """
        if self.is_over:
            return
        with self._reporting_rule_violations():
            self._assert_phase(Phase.DEPLOYMENT, "Deployment is over.")
            piece = self.deployment.place(self.board, cell, self.current_player)
            logger.info(
                "%s placed a %s on %s",
                self.current_player.display_name,
                piece.type.name.lower(),
                cell.to_key(),
            )
            self._advance_turn()
            if self.deployment.is_complete():
                self._change_phase(Phase.GAMEPLAY)

    def select_or_move(self, cell: Cell) -> None:
        """
        A single click on a cell during gameplay
        -----

        * nothing selected yet --> select the piece on the cell (only your own). Does not end your turn.
        * a piece is selected --> attempt to move it to the cell. The selection is dropped either way.
        """
        if self.is_over:
            return
        with self._reporting_rule_violations():
            self._assert_phase(
                Phase.GAMEPLAY, "Pieces can only be moved after deployment."
            )
            if self.selected_cell is None:
                self._select_board_piece(cell)
            else:
                self._attempt_move(Move(from_cell=self.selected_cell, to_cell=cell))

    def legal_destinations(self) -> list[Cell]:
        """Cells the selected piece can reach by its movement rule (for highlighting). Connectivity is only checked on the actual attempt."""
        if self.phase != Phase.GAMEPLAY or self.selected_cell is None:
            return []
        return self.board.destinations(self.selected_cell)

    # -- PRIVATE HELPERS ---
    @contextmanager
    def _reporting_rule_violations(self) -> Iterator[None]:
        """Turn a rejected action into the status message. Any previous message is cleared by a new action."""
        self.message = None
        try:
            yield
        except RuleViolation as error:
            logger.info(
                "Rejected action of %s: %s", self.current_player.display_name, error
            )
            self.message = str(error)

    def _assert_phase(self, phase: Phase, message: str) -> None:
        if self.phase != phase:
            raise PhaseError(message)

    def _assert_your_turn(self, player: Player) -> None:
        """You must wait for your turn before picking pieces."""
        if player != self.current_player:
            raise NotYourTurnError(
                f"It is {self.current_player.display_name}'s turn."
            )

    def _select_board_piece(self, cell: Cell) -> None:
        """Clicking an empty cell or an opponent's piece does nothing"""
        piece = self.board.piece(cell)
        if piece is not None and piece.owner == self.current_player:
            self.selected_cell = cell

    def _attempt_move(self, move: Move) -> None:
        """
        Attempt to make a move
        -----

        1. target not reachable by the piece? --> just deselect
        2. move would split the formation? --> reject, board untouched
        3. update the board
        4. check for end condition, otherwise the other player is up
        """
        self.selected_cell = None

        if move not in self.board.candidate_moves(move.from_cell):
            return

        if not self.board.keeps_connected_after_move(move):
            raise ContinuityError("Invalid Move: Breaks board continuity.")

        captured_piece = self.board.move_piece(move)
        logger.info(
            "%s moved %s -> %s%s",
            self.current_player.display_name,
            move.from_cell.to_key(),
            move.to_cell.to_key(),
            f" capturing a {captured_piece.type.name.lower()}" if captured_piece else "",
        )

        self._update_game_status()
        if not self.is_over:
            self._advance_turn()

    def _advance_turn(self) -> None:
        self.current_player = self.current_player.opponent

    def _update_game_status(self) -> None:
        """
        The game ends as soon as fewer than two kings are on the board.

        NOTE: a single move can only take one king, but zero kings is still handled (then nobody wins).
        """
        if len(self.board.kings()) < 2:
            self._change_phase(Phase.ENDED)

    def _change_phase(self, new_phase: Phase) -> None:
        logger.info("Phase change: %s -> %s", self.phase.name, new_phase.name)
        self.phase = new_phase
        if new_phase == Phase.ENDED:
            logger.info("Game over: %s", self.status)


def _parse_player(name: str) -> Player:
    if name.upper() not in Player.__members__:
        raise GameStateError(
            f"Invalid player: {name!r}. \nPick one from {','.join([p.name.lower() for p in Player])}"
        )
    return Player[name.upper()]


def _parse_piece_type(name: str) -> PieceType:
    if name.upper() not in PieceType.__members__:
        raise GameStateError(
            f"Invalid piece type: {name!r}. \nPick one from {','.join([t.name.lower() for t in PieceType])}"
        )
    return PieceType[name.upper()]
