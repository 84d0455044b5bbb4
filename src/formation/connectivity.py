"""
The formation must always hang together
-----

All occupied cells have to form a single cluster, where two cells are connected if they touch (8 directions, corners included).

Every check works on a copy of the occupied cells with the proposed change applied. The live board is never touched.
"""

from collections import deque
from typing import Iterable, Protocol

from src.formation.cell import Cell
from src.formation.moves import Move


class Board(Protocol):
    """Just the parts the connectivity checks need"""

    def occupied_cells(self) -> set[Cell]: ...


def is_connected(cells: Iterable[Cell]) -> bool:
    """
    Breadth-first search from any one of the cells. The cluster is connected when the search reaches all of them.

    0 or 1 cells are trivially connected.
    """
    remaining = set(cells)
    if len(remaining) <= 1:
        return True

    seed = remaining.pop()
    queue = deque([seed])
    while queue:
        cell = queue.popleft()
        for neighbour in cell.neighbours():
            if neighbour in remaining:
                remaining.remove(neighbour)
                queue.append(neighbour)
    return not remaining


def is_connected_after_placement(board: Board, cell: Cell) -> bool:
    """Would the formation still be one cluster if a piece gets added on the cell?"""
    cells = set(board.occupied_cells())
    cells.add(cell)
    return is_connected(cells)


def is_connected_after_move(board: Board, move: Move) -> bool:
    """
    Would the formation still be one cluster after the move?

    NOTE: a capture simply replaces the piece on the target cell, so the set of cells only loses the origin.
    """
    cells = set(board.occupied_cells())
    cells.discard(move.from_cell)
    cells.add(move.to_cell)
    return is_connected(cells)
