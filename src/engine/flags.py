"""Flag toggling on unopened tiles."""
from .board import Board
from .tile import TileState


def toggle_flag(board: Board, index: int) -> Board:
    """
    Cycle a tile between HIDDEN and FLAGGED.

    Returns the board unchanged if the tile is open.
    """
    state = board.state(index)
    if state == TileState.HIDDEN:
        return board.with_states({index: TileState.FLAGGED})
    if state == TileState.FLAGGED:
        return board.with_states({index: TileState.HIDDEN})
    return board
