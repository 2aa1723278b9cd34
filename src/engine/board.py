"""
Board module for the Minesweeper engine.

A Board is an immutable snapshot of the grid: the configuration, one
Tile per position and the running count of open tiles. Every engine
operation returns a new Board instead of mutating the old one.
"""
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Dict, FrozenSet, List, Tuple

import numpy as np

from .adjacency import neighbors
from .config import BoardConfig
from .tile import MINE, Tile, TileState


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of a game session."""

    INITIAL = auto()
    PLAYING = auto()
    WIN = auto()
    LOSE = auto()

    @property
    def is_over(self) -> bool:
        return self in (GameState.WIN, GameState.LOSE)


# ============================================================================
# Board Snapshot
# ============================================================================

@dataclass(frozen=True)
class Board:
    """
    Immutable Minesweeper board snapshot.

    Attributes:
        config: Dimensions and mine total.
        tiles: Row-major tuple of width * height tiles.
        mines_laid: Whether mines have been placed yet.
        open_count: Number of tiles currently open.
    """

    config: BoardConfig
    tiles: Tuple[Tile, ...] = field(repr=False)
    mines_laid: bool = False
    open_count: int = 0

    def __post_init__(self) -> None:
        if len(self.tiles) != self.config.tile_count:
            raise ValueError(
                f"Expected {self.config.tile_count} tiles, "
                f"got {len(self.tiles)}"
            )

    @classmethod
    def blank(cls, config: BoardConfig) -> "Board":
        """Create a board with no mines and every tile hidden."""
        return cls(config, tuple(Tile() for _ in range(config.tile_count)))

    # ========================================================================
    # Dimensions
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def mine_total(self) -> int:
        return self.config.mine_total

    @property
    def tile_count(self) -> int:
        return self.config.tile_count

    # ========================================================================
    # Tile Accessors
    # ========================================================================

    def is_valid_index(self, index: int) -> bool:
        """Check if index addresses a tile on this board."""
        return 0 <= index < self.tile_count

    def tile(self, index: int) -> Tile:
        return self.tiles[index]

    def mine_count(self, index: int) -> int:
        return self.tiles[index].mine_count

    def state(self, index: int) -> TileState:
        return self.tiles[index].state

    def is_mine(self, index: int) -> bool:
        return self.tiles[index].mine_count == MINE

    def neighbors(self, index: int) -> FrozenSet[int]:
        """Get in-bounds neighbor indices of a tile."""
        return neighbors(index, self.width, self.height)

    def indices_in_state(self, state: TileState) -> List[int]:
        """Get indices of all tiles in the given state, in board order."""
        return [i for i, tile in enumerate(self.tiles) if tile.state == state]

    def mine_indices(self) -> List[int]:
        return [i for i, tile in enumerate(self.tiles) if tile.is_mine]

    @property
    def flagged_count(self) -> int:
        return sum(1 for tile in self.tiles if tile.is_flagged)

    @property
    def remaining_count(self) -> int:
        """Tiles not yet open (hidden or flagged)."""
        return self.tile_count - self.open_count

    @property
    def all_safe_open(self) -> bool:
        return self.mines_laid and self.remaining_count == self.mine_total

    # ========================================================================
    # Snapshot Updates
    # ========================================================================

    def with_states(self, changes: Dict[int, TileState]) -> "Board":
        """
        Produce a new board with some tile states changed.

        The open-tile counter is adjusted for every tile entering or
        leaving the OPEN state.

        Args:
            changes: Mapping of tile index to its new state.

        Returns:
            New board snapshot, or this board if nothing changed.
        """
        tiles = list(self.tiles)
        open_delta = 0
        changed = False
        for index, state in changes.items():
            old = tiles[index]
            if old.state == state:
                continue
            if state == TileState.OPEN:
                open_delta += 1
            elif old.state == TileState.OPEN:
                open_delta -= 1
            tiles[index] = old.with_state(state)
            changed = True

        if not changed:
            return self
        return replace(
            self, tiles=tuple(tiles), open_count=self.open_count + open_delta
        )

    # ========================================================================
    # Observation
    # ========================================================================

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array shaped (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = open with adjacent count
                9 = open mine
        """
        obs = np.fromiter(
            (tile.to_observation() for tile in self.tiles),
            dtype=np.int8,
            count=self.tile_count,
        )
        return obs.reshape(self.height, self.width)

    def mine_count_grid(self) -> np.ndarray:
        """Get the mine counts (MINE for mines) as a (height, width) array."""
        counts = np.fromiter(
            (tile.mine_count for tile in self.tiles),
            dtype=np.int8,
            count=self.tile_count,
        )
        return counts.reshape(self.height, self.width)
