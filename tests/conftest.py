"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest

from src.db.memory_repository import InMemoryGameRepository
from src.formation.board import Board
from src.formation.deployment import Deployment, Roster
from src.formation.game import Game, Phase
from src.formation.pieces import Player


@pytest.fixture
def mock_repository() -> Generator[InMemoryGameRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = InMemoryGameRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def game_in_play() -> Callable[[str, Player], Game]:
    """Call the inner function with a board diagram (see Board.from_text) to get a game where deployment is already over"""

    def _create_game(diagram: str, to_move: Player = Player.RED) -> Game:
        return Game(
            board=Board.from_text(diagram),
            deployment=Deployment({player: Roster() for player in Player}),
            phase=Phase.GAMEPLAY,
            current_player=to_move,
        )

    return _create_game
