"""
Evaluation module for Minesweeper agents.

Plays many seeded games per agent through the GameController's agent
API and collects win rates and step counts.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from agents.base_agent import BaseAgent
from engine import BoardConfig, GameController, GameState

logger = logging.getLogger(__name__)


# ============================================================================
# Evaluation Statistics
# ============================================================================

@dataclass
class EpisodeStats:
    """Statistics for a single game."""

    steps: int = 0
    won: bool = False
    finished: bool = False
    revealed_tiles: int = 0
    flagged_tiles: int = 0


@dataclass
class EvaluationStats:
    """Accumulated statistics over many games."""

    episodes: List[EpisodeStats] = field(default_factory=list)

    @property
    def games(self) -> int:
        return len(self.episodes)

    @property
    def wins(self) -> int:
        return sum(1 for episode in self.episodes if episode.won)

    @property
    def losses(self) -> int:
        return sum(
            1 for episode in self.episodes
            if episode.finished and not episode.won
        )

    @property
    def unfinished(self) -> int:
        """Games still undecided when the step cap was reached."""
        return sum(1 for episode in self.episodes if not episode.finished)

    @property
    def max_steps_taken(self) -> int:
        return max((episode.steps for episode in self.episodes), default=0)

    def _mean(self, attribute: str) -> float:
        if not self.episodes:
            return 0.0
        total = sum(getattr(episode, attribute) for episode in self.episodes)
        return total / len(self.episodes)

    @property
    def win_rate(self) -> float:
        return self.wins / self.games if self.episodes else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "games": self.games,
            "wins": self.wins,
            "losses": self.losses,
            "unfinished": self.unfinished,
            "win_rate": self.win_rate,
            "avg_steps": self._mean("steps"),
            "max_steps": self.max_steps_taken,
            "avg_revealed": self._mean("revealed_tiles"),
            "avg_flagged": self._mean("flagged_tiles"),
        }


# ============================================================================
# Agent Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare agents on seeded games.

    Game i uses seed (seed + i) for both the board and the agent, so
    results are reproducible and every agent sees the same boards.
    """

    def __init__(
        self,
        board_config: Optional[BoardConfig] = None,
        num_episodes: int = 100,
        seed: int = 0,
        max_steps: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Board configuration for evaluation.
            num_episodes: Number of games per agent.
            seed: Seed of the first game.
            max_steps: Step cap per game (default: tile count).
        """
        self.board_config = board_config or BoardConfig()
        self.num_episodes = num_episodes
        self.seed = seed
        self.max_steps = (
            max_steps if max_steps is not None
            else self.board_config.tile_count
        )

    def play_episode(
        self, agent_class: Type[BaseAgent], seed: int
    ) -> EpisodeStats:
        """Play one game to completion or to the step cap."""
        controller = GameController(self.board_config, seed=seed)
        agent = agent_class(controller, seed=seed)
        controller.start_agent(agent)

        stats = EpisodeStats()
        while controller.agent_active and stats.steps < self.max_steps:
            controller.agent_step()
            stats.steps += 1

        board = controller.board
        stats.finished = controller.state.is_over
        stats.won = controller.state == GameState.WIN
        stats.revealed_tiles = board.open_count
        stats.flagged_tiles = board.flagged_count
        if not stats.finished:
            logger.warning(
                "Game with seed %d undecided after %d steps", seed, stats.steps
            )
        return stats

    def evaluate(self, agent_class: Type[BaseAgent]) -> EvaluationStats:
        """
        Evaluate a single agent type.

        Args:
            agent_class: Agent class, constructed once per game.

        Returns:
            Accumulated statistics.
        """
        stats = EvaluationStats()
        for episode in range(self.num_episodes):
            stats.episodes.append(
                self.play_episode(agent_class, self.seed + episode)
            )
        logger.info(
            "%s: %d/%d wins", agent_class.__name__, stats.wins, stats.games
        )
        return stats

    def compare(
        self, agents: Dict[str, Type[BaseAgent]]
    ) -> Dict[str, EvaluationStats]:
        """
        Compare multiple agent types on the same seeded games.

        Args:
            agents: Dictionary of agent_name -> agent class.

        Returns:
            Dictionary of agent_name -> statistics.
        """
        results = {}
        for name, agent_class in agents.items():
            logger.info("Evaluating %s...", name)
            results[name] = self.evaluate(agent_class)
        return results
