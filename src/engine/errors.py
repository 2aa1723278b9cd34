"""
Exception types for the Minesweeper engine.

Illegal moves are never raised; they are silent no-ops handled by the
controller. Only configuration and generation problems surface here.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class ConfigError(MinesweeperError, ValueError):
    """Raised when a board configuration is rejected."""


class GenerationInfeasible(MinesweeperError, RuntimeError):
    """Raised when mines cannot fit outside the first-click exclusion."""
