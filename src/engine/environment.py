"""
Gymnasium environment wrapper around the game controller.

Provides a standard RL interface so external agents can drive the
engine through reveal actions.
"""
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, GameState
from .config import BoardConfig
from .controller import GameController
from .reveal import Outcome


# ============================================================================
# Text Rendering
# ============================================================================

def render_text(board: Board, reveal_mines: bool = False) -> str:
    """
    Render a board as ASCII text.

    Args:
        board: Board snapshot.
        reveal_mines: Show mines that are still hidden or flagged.

    Returns:
        One line per row: "." hidden, "F" flagged, "*" mine,
        " " open zero, digit for open clue.
    """
    lines = []
    for row in range(board.height):
        row_str = ""
        for col in range(board.width):
            tile = board.tile(row * board.width + col)
            if tile.is_mine and (tile.is_open or reveal_mines):
                row_str += "*"
            elif tile.is_flagged:
                row_str += "F"
            elif tile.is_hidden:
                row_str += "."
            elif tile.mine_count == 0:
                row_str += " "
            else:
                row_str += str(tile.mine_count)
            row_str += " "
        lines.append(row_str.rstrip())
    return "\n".join(lines)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden tile
        - -2 = flagged tile
        - 0-8 = open tile with adjacent mine count
        - 9 = open mine

    Actions:
        Discrete action space of size width * height.
        Action i opens tile i (row i // width, column i % width).

    Rewards:
        - +1 for opening a safe tile
        - +10 for winning the game
        - -10 for opening a mine
        - -0.1 for a move that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()

        self.controller = GameController(config)
        self.config = self.controller.config
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.tile_count)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.controller.reset(seed=seed)
        self._steps = 0
        return self.controller.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Open the tile selected by the action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        result = self.controller.click(int(action))

        if result.delta.opened == 0:
            reward = -0.1
        elif result.delta.outcome == Outcome.WIN:
            reward = 10.0
        elif result.delta.outcome == Outcome.LOSE:
            reward = -10.0
        else:
            reward = 1.0

        terminated = result.state.is_over
        return (
            result.board.get_observation(),
            reward,
            terminated,
            False,
            self._get_info(),
        )

    def _get_info(self) -> Dict[str, Any]:
        board = self.controller.board
        return {
            "steps": self._steps,
            "revealed": board.open_count,
            "total_safe": board.tile_count - board.mine_total,
            "game_state": self.controller.state.name,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        reveal = self.controller.state in (GameState.WIN, GameState.LOSE)
        return render_text(self.controller.board, reveal_mines=reveal)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = hidden tile that can be opened.
        """
        if self.controller.state.is_over:
            return np.zeros(self.action_space.n, dtype=bool)
        return self.controller.board.get_observation().flatten() == -1
