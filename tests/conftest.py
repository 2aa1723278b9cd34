"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Iterable

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from engine import (
    Board,
    BoardConfig,
    GameController,
    TileState,
    lay_mines,
)


BoardFactory = Callable[..., Board]


# ============================================================================
# Board Helpers
# ============================================================================

def build_board(
    width: int,
    height: int,
    mines: Iterable[int],
    opened: Iterable[int] = (),
    flagged: Iterable[int] = (),
) -> Board:
    """Lay mines at fixed positions and set some tiles open or flagged."""
    mines = list(mines)
    board = lay_mines(
        Board.blank(BoardConfig(width, height, len(mines))), mines
    )
    changes = {index: TileState.OPEN for index in opened}
    changes.update({index: TileState.FLAGGED for index in flagged})
    return board.with_states(changes)


@pytest.fixture
def board_factory() -> BoardFactory:
    """Build boards with a fixed mine layout."""
    return build_board


# ============================================================================
# Controller Fixtures
# ============================================================================

@pytest.fixture
def default_controller() -> GameController:
    """Create a default 9x9 controller with 16 mines."""
    return GameController(seed=0)


@pytest.fixture
def beginner_controller() -> GameController:
    """Create a 9x9 controller with 10 mines."""
    return GameController(BoardConfig(9, 9, 10), seed=42)


@pytest.fixture
def small_controller() -> GameController:
    """Create a small 4x4 controller with the most mines it can take."""
    return GameController(BoardConfig(4, 4, 4), seed=7)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def wide_config() -> BoardConfig:
    """Non-square configuration."""
    return BoardConfig(16, 8, 30)
