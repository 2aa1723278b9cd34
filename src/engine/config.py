"""
Board configuration and validation.

BoardConfig only checks that a board can exist at all. The playable
bounds (side lengths and mine density) are enforced by configure(),
which is what collaborators call with raw user input.
"""
from dataclasses import dataclass
from typing import Tuple, Union

from .errors import ConfigError


# ============================================================================
# Constants
# ============================================================================

MIN_SIDE = 4
MAX_SIDE = 16

# Mine density bounds in tenths of the tile count
MIN_MINE_TENTHS = 1
MAX_MINE_TENTHS = 3


def mine_bounds(width: int, height: int) -> Tuple[int, int]:
    """Inclusive (low, high) playable mine totals, rounded down."""
    tile_count = width * height
    return (
        tile_count * MIN_MINE_TENTHS // 10,
        tile_count * MAX_MINE_TENTHS // 10,
    )


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_total: Total mines to place.
    """

    width: int = 9
    height: int = 9
    mine_total: int = 16

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure the board is structurally possible."""
        for name in ("width", "height", "mine_total"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        if self.width < 1 or self.height < 1:
            raise ConfigError("Board dimensions must be positive")
        if self.mine_total < 1:
            raise ConfigError("Board needs at least one mine")
        if self.mine_total >= self.tile_count:
            raise ConfigError(f"Too many mines (max {self.tile_count - 1})")

    @property
    def tile_count(self) -> int:
        return self.width * self.height

    @property
    def is_playable(self) -> bool:
        """Check the side and mine-density bounds the agent relies on."""
        if not (MIN_SIDE <= self.width <= MAX_SIDE):
            return False
        if not (MIN_SIDE <= self.height <= MAX_SIDE):
            return False
        low, high = mine_bounds(self.width, self.height)
        return low <= self.mine_total <= high


DEFAULT_CONFIG = BoardConfig(9, 9, 16)


# ============================================================================
# Input Validation
# ============================================================================

def _parse_int(name: str, value: Union[int, str]) -> int:
    """Accept ints and base-10 integer strings; reject everything else."""
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        digits = text.lstrip("+-")
        if digits.isascii() and digits.isdigit():
            try:
                return int(text)
            except ValueError:
                raise ConfigError(
                    f"{name} must be an integer, got {value!r}"
                ) from None
    raise ConfigError(f"{name} must be an integer, got {value!r}")


def configure(
    width: Union[int, str],
    height: Union[int, str],
    mine_total: Union[int, str],
) -> BoardConfig:
    """
    Validate raw board parameters.

    Args:
        width: Number of columns, between MIN_SIDE and MAX_SIDE.
        height: Number of rows, between MIN_SIDE and MAX_SIDE.
        mine_total: Mines, between 10% and 30% of the tile count
            (rounded down).

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If any value is non-integer or out of range.
    """
    width = _parse_int("width", width)
    height = _parse_int("height", height)
    mine_total = _parse_int("mine_total", mine_total)

    for name, side in (("width", width), ("height", height)):
        if not (MIN_SIDE <= side <= MAX_SIDE):
            raise ConfigError(
                f"{name} must be between {MIN_SIDE} and {MAX_SIDE}, got {side}"
            )

    low, high = mine_bounds(width, height)
    if not (low <= mine_total <= high):
        raise ConfigError(
            f"mine_total must be between {low} and {high} "
            f"for a {width}x{height} board, got {mine_total}"
        )

    return BoardConfig(width, height, mine_total)
