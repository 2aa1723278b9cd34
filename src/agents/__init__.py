"""
Minesweeper agents module.

Provides agents that play a GameController to completion:
- SolverAgent: Local constraint propagation with probability fallback
- RandomAgent: Baseline random selection
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .solver_agent import (
    PROBABILITY_EPSILON,
    ClueInfo,
    ScanResult,
    SolverAgent,
    base_rate,
    iter_clues,
    scan_board,
    select_safest,
)

__all__ = [
    "BaseAgent",
    "ClueInfo",
    "PROBABILITY_EPSILON",
    "RandomAgent",
    "ScanResult",
    "SolverAgent",
    "base_rate",
    "iter_clues",
    "scan_board",
    "select_safest",
]
