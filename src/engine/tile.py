"""
Tile module for the Minesweeper engine.

A tile carries its mine count (or the MINE sentinel) and a visibility
state. Tiles are immutable; a state change produces a new tile.
"""
from dataclasses import dataclass, replace
from enum import Enum, auto


# ============================================================================
# Constants
# ============================================================================

MINE = -1


class TileState(Enum):
    """Possible visibility states of a tile."""

    HIDDEN = auto()
    FLAGGED = auto()
    OPEN = auto()


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass(frozen=True)
class Tile:
    """
    A single tile of the Minesweeper grid.

    Attributes:
        mine_count: Mines in the 8-neighborhood (0-8), or MINE if the
            tile itself holds a mine.
        state: Current visibility state.
    """

    mine_count: int = 0
    state: TileState = TileState.HIDDEN

    def with_state(self, state: TileState) -> "Tile":
        """Return a copy of this tile in the given state."""
        if state == self.state:
            return self
        return replace(self, state=state)

    @property
    def is_mine(self) -> bool:
        return self.mine_count == MINE

    @property
    def is_hidden(self) -> bool:
        return self.state == TileState.HIDDEN

    @property
    def is_flagged(self) -> bool:
        return self.state == TileState.FLAGGED

    @property
    def is_open(self) -> bool:
        return self.state == TileState.OPEN

    def to_observation(self) -> int:
        """
        Convert tile to an observation value.

        Returns:
            -1: Hidden tile
            -2: Flagged tile
            0-8: Open tile with adjacent mine count
            9: Open mine
        """
        if self.state == TileState.HIDDEN:
            return -1
        if self.state == TileState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.mine_count
