"""
Reveal engine: opening tiles, cascading flood fill and win/lose detection.
"""
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Deque, Dict

from .board import Board
from .tile import MINE, TileState


class Outcome(Enum):
    """Result of opening a tile."""

    CONTINUE = auto()
    WIN = auto()
    LOSE = auto()


@dataclass(frozen=True)
class OpenResult:
    """
    Result of a single open call.

    Attributes:
        board: Board snapshot after the call.
        opened: Number of tiles opened by the call.
        outcome: Whether the game continues, is won or is lost.
    """

    board: Board
    opened: int
    outcome: Outcome


def open_tile(board: Board, index: int) -> OpenResult:
    """
    Open a hidden tile.

    Opening a zero cascades breadth-first: every neighbor that is not yet
    open is opened, and zero neighbors keep the expansion going. Opening
    a mine opens every mine on the board.

    Args:
        board: Board with mines laid.
        index: Tile to open.

    Returns:
        OpenResult with the new snapshot. The board is returned unchanged
        with opened == 0 if the tile is not hidden.
    """
    if board.state(index) != TileState.HIDDEN:
        return OpenResult(board, 0, Outcome.CONTINUE)

    if board.is_mine(index):
        return _detonate(board, index)

    changes = _flood(board, index)
    new_board = board.with_states(changes)
    outcome = Outcome.WIN if new_board.all_safe_open else Outcome.CONTINUE
    return OpenResult(new_board, len(changes), outcome)


def _flood(board: Board, index: int) -> Dict[int, TileState]:
    """Collect every tile opened by clicking a safe tile."""
    opened: Dict[int, TileState] = {index: TileState.OPEN}
    frontier: Deque[int] = deque()
    if board.mine_count(index) == 0:
        frontier.append(index)

    while frontier:
        current = frontier.popleft()
        for neighbor in board.neighbors(current):
            if neighbor in opened or board.state(neighbor) == TileState.OPEN:
                continue
            opened[neighbor] = TileState.OPEN
            if board.mine_count(neighbor) == 0:
                frontier.append(neighbor)

    return opened


def _detonate(board: Board, index: int) -> OpenResult:
    """Open the clicked mine and every other mine not yet open."""
    changes = {
        i: TileState.OPEN
        for i, tile in enumerate(board.tiles)
        if tile.mine_count == MINE and tile.state != TileState.OPEN
    }
    changes[index] = TileState.OPEN
    return OpenResult(board.with_states(changes), len(changes), Outcome.LOSE)
