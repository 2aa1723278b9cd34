"""
Random agent for Minesweeper.

Serves as a baseline by opening random hidden tiles.
"""
import logging

from engine import GameSnapshot, GameState, TileState

from .base_agent import BaseAgent

logger = logging.getLogger(__name__)


# ============================================================================
# Random Agent
# ============================================================================

class RandomAgent(BaseAgent):
    """
    Agent that opens a hidden tile chosen uniformly at random.

    This provides a baseline for comparing the solver. It never flags.
    """

    def step(self) -> GameSnapshot:
        """Open one random hidden tile."""
        if not self.is_active:
            return self.controller.snapshot()

        board = self.controller.board
        if self.controller.state == GameState.INITIAL:
            candidates = list(range(board.tile_count))
        else:
            candidates = board.indices_in_state(TileState.HIDDEN)

        if not candidates:
            logger.warning("No hidden tiles left to open; forcing a loss")
            return self.controller.force_lose()

        index = int(self.rng.choice(candidates))
        logger.debug("Random: opening tile %d", index)
        self.controller.click(index, by_agent=True)
        self.steps_taken += 1
        return self.controller.snapshot()
