"""
Base agent interface for Minesweeper agents.

Agents drive a GameController directly: they read its snapshot and issue
clicks and flags back through it, one step at a time.
"""
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from engine import GameController, GameSnapshot, GameState


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for Minesweeper agents.

    All agents must implement step(), which performs exactly one move
    pass and returns. Every step must change the board while the game
    is undecided, so run() always terminates.
    """

    def __init__(
        self,
        controller: GameController,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the agent.

        Args:
            controller: Game the agent plays.
            seed: Random seed for the agent's own choices.
        """
        self.controller = controller
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.steps_taken = 0

    @property
    def is_active(self) -> bool:
        """Check if the game still accepts moves from the agent."""
        return self.controller.state in (GameState.INITIAL, GameState.PLAYING)

    @abstractmethod
    def step(self) -> GameSnapshot:
        """
        Perform one move pass.

        Returns:
            Snapshot after the pass.
        """
        pass

    def run(self, max_steps: Optional[int] = None) -> GameSnapshot:
        """
        Step until the game is won or lost.

        Args:
            max_steps: Optional cap on the number of steps.

        Returns:
            Final snapshot.
        """
        steps = 0
        while self.is_active:
            if max_steps is not None and steps >= max_steps:
                break
            self.step()
            steps += 1
        return self.controller.snapshot()

    def reset(self) -> None:
        """Reset agent state for a new game."""
        self.rng = np.random.default_rng(self.seed)
        self.steps_taken = 0
