"""
Evaluation module for Minesweeper agents.

Runs agents over many seeded games and reports win rates.
"""
from .evaluator import EpisodeStats, EvaluationStats, Evaluator

__all__ = [
    "EpisodeStats",
    "EvaluationStats",
    "Evaluator",
]
