"""
Minesweeper engine module.

Provides adjacency, board generation, reveal and flag logic, and the
game controller that collaborators drive.
"""
from .adjacency import index_to_position, neighbors, position_to_index
from .board import Board, GameState
from .config import (
    DEFAULT_CONFIG,
    MAX_SIDE,
    MIN_SIDE,
    BoardConfig,
    configure,
    mine_bounds,
)
from .controller import (
    ClickResult,
    GameController,
    GameSnapshot,
    OutcomeDelta,
    TileView,
)
from .environment import MinesweeperEnv, render_text
from .errors import ConfigError, GenerationInfeasible, MinesweeperError
from .flags import toggle_flag
from .generator import excluded_region, generate, lay_mines
from .reveal import OpenResult, Outcome, open_tile
from .tile import MINE, Tile, TileState

__all__ = [
    "Board",
    "BoardConfig",
    "ClickResult",
    "ConfigError",
    "DEFAULT_CONFIG",
    "GameController",
    "GameSnapshot",
    "GameState",
    "GenerationInfeasible",
    "MAX_SIDE",
    "MIN_SIDE",
    "MINE",
    "MinesweeperEnv",
    "MinesweeperError",
    "OpenResult",
    "Outcome",
    "OutcomeDelta",
    "Tile",
    "TileState",
    "TileView",
    "configure",
    "excluded_region",
    "generate",
    "index_to_position",
    "lay_mines",
    "mine_bounds",
    "neighbors",
    "open_tile",
    "position_to_index",
    "render_text",
    "toggle_flag",
]
