"""
Solver agent for Minesweeper.

Uses local constraint propagation over open clue tiles to find certain
mines and certain safe tiles, and falls back to the tile with the lowest
estimated mine probability when no certain move exists.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set

from engine import (
    Board,
    GameController,
    GameSnapshot,
    GameState,
    TileState,
    index_to_position,
)

from .base_agent import BaseAgent

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

# Probabilities closer than this are treated as tied
PROBABILITY_EPSILON = 1e-9


# ============================================================================
# Clue Analysis
# ============================================================================

@dataclass
class ClueInfo:
    """
    Local constraint around an open clue tile.

    For example, an open "2" with 3 hidden neighbors and 1 flagged
    neighbor leaves 1 mine among the 3 hidden tiles.
    """

    index: int
    mine_count: int
    hidden_neighbors: Set[int]
    flagged_neighbors: Set[int]

    @property
    def remaining_mines(self) -> int:
        """Mines still to be found among hidden neighbors."""
        return self.mine_count - len(self.flagged_neighbors)

    @property
    def local_odds(self) -> float:
        """Chance that any one hidden neighbor is a mine."""
        return self.remaining_mines / len(self.hidden_neighbors)

    @property
    def all_mines(self) -> bool:
        return self.remaining_mines == len(self.hidden_neighbors)

    @property
    def all_safe(self) -> bool:
        return self.remaining_mines == 0


def iter_clues(board: Board) -> Iterator[ClueInfo]:
    """
    Yield a ClueInfo for every open clue tile with hidden neighbors.

    Tiles are visited in board order. Clues without hidden neighbors
    carry no new information and are skipped.
    """
    for index, tile in enumerate(board.tiles):
        if not tile.is_open or tile.mine_count < 1:
            continue

        hidden: Set[int] = set()
        flagged: Set[int] = set()
        for neighbor in board.neighbors(index):
            state = board.state(neighbor)
            if state == TileState.HIDDEN:
                hidden.add(neighbor)
            elif state == TileState.FLAGGED:
                flagged.add(neighbor)

        if hidden:
            yield ClueInfo(index, tile.mine_count, hidden, flagged)


def base_rate(board: Board) -> float:
    """Mines left unflagged over tiles not yet open."""
    return (board.mine_total - board.flagged_count) / board.remaining_count


@dataclass
class ScanResult:
    """
    Outcome of one pass over the clues.

    Attributes:
        certain: First clue whose hidden neighbors are all mines or all
            safe, if any. The pass stops there.
        probabilities: Mine probability per hidden tile; only filled
            when no certain clue was found.
    """

    certain: Optional[ClueInfo] = None
    probabilities: Dict[int, float] = field(default_factory=dict)


def scan_board(board: Board) -> ScanResult:
    """
    Look for a certain move, else estimate mine probabilities.

    A hidden tile next to several clues takes the highest local odds
    among them. Hidden tiles next to no clue take the base rate.

    Args:
        board: Board in play.

    Returns:
        ScanResult with either a certain clue or the probability map.
    """
    probabilities: Dict[int, float] = {}
    for clue in iter_clues(board):
        if clue.all_mines or clue.all_safe:
            return ScanResult(certain=clue)

        odds = clue.local_odds
        for neighbor in clue.hidden_neighbors:
            if odds > probabilities.get(neighbor, -1.0):
                probabilities[neighbor] = odds

    rate = base_rate(board)
    for index in board.indices_in_state(TileState.HIDDEN):
        probabilities.setdefault(index, rate)

    return ScanResult(probabilities=probabilities)


# ============================================================================
# Solver Agent
# ============================================================================

class SolverAgent(BaseAgent):
    """
    Agent that plays one deduction pass per step.

    Strategy:
        1. In INITIAL, open a uniformly random tile.
        2. Scan open clue tiles in board order. If a clue's unflagged
           mines equal its hidden neighbors, flag them all and stop.
           If it has no unflagged mines left, open its hidden neighbors
           and stop.
        3. Otherwise every hidden neighbor of a clue gets the highest
           local odds of any clue touching it; remaining hidden tiles
           get the base rate.
        4. Open a random tile among those with the lowest probability.

    Every pass flags or opens at least one tile, so a game never takes
    more steps than it has tiles.
    """

    def __init__(
        self,
        controller: GameController,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(controller, seed)
        self.certain_moves = 0
        self.guesses_made = 0

    def step(self) -> GameSnapshot:
        """Perform exactly one deduction pass."""
        if not self.is_active:
            return self.controller.snapshot()

        if not self.controller.config.is_playable:
            logger.warning(
                "Configuration %s is outside the playable bounds; "
                "forcing a loss",
                self.controller.config,
            )
            return self.controller.force_lose()

        self.steps_taken += 1
        board = self.controller.board

        if self.controller.state == GameState.INITIAL:
            index = int(self.rng.integers(board.tile_count))
            logger.debug("Initial: opening %s", self._describe(index))
            self.controller.click(index, by_agent=True)
            return self.controller.snapshot()

        scan = scan_board(board)
        if scan.certain is not None and scan.certain.all_mines:
            self._flag_all(scan.certain)
        elif scan.certain is not None:
            self._open_all(scan.certain)
        elif scan.probabilities:
            self._guess(scan.probabilities)
        else:
            logger.warning("No hidden tiles left to open; forcing a loss")
            return self.controller.force_lose()
        return self.controller.snapshot()

    def reset(self) -> None:
        super().reset()
        self.certain_moves = 0
        self.guesses_made = 0

    # ========================================================================
    # Moves
    # ========================================================================

    def _flag_all(self, clue: ClueInfo) -> None:
        """Flag every hidden neighbor of a clue (certain mines)."""
        self.certain_moves += 1
        for neighbor in sorted(clue.hidden_neighbors):
            if self.controller.state != GameState.PLAYING:
                break
            logger.debug(
                "P = 1 at %s: flagging %s",
                self._describe(clue.index), self._describe(neighbor),
            )
            self.controller.flag(neighbor, by_agent=True)
        logger.debug(
            "%d/%d mines flagged",
            self.controller.board.flagged_count,
            self.controller.board.mine_total,
        )

    def _open_all(self, clue: ClueInfo) -> None:
        """Open every hidden neighbor of a clue (certain safe tiles)."""
        self.certain_moves += 1
        for neighbor in sorted(clue.hidden_neighbors):
            if self.controller.state != GameState.PLAYING:
                break
            logger.debug(
                "P = 0 at %s: opening %s",
                self._describe(clue.index), self._describe(neighbor),
            )
            self.controller.click(neighbor, by_agent=True)

    def _guess(self, probabilities: Dict[int, float]) -> None:
        """Open a random tile among those least likely to be a mine."""
        safest = select_safest(probabilities)
        index = int(self.rng.choice(safest))
        self.guesses_made += 1
        logger.debug(
            "Guess: opening %s with mine probability %.3f (%d tied)",
            self._describe(index), probabilities[index], len(safest),
        )
        self.controller.click(index, by_agent=True)

    def _describe(self, index: int) -> str:
        row, col = index_to_position(index, self.controller.board.width)
        return f"R{row}, C{col}"


def select_safest(probabilities: Dict[int, float]) -> List[int]:
    """
    Get the tiles whose probability is minimal.

    Args:
        probabilities: Mine probability per hidden tile.

    Returns:
        Sorted indices within PROBABILITY_EPSILON of the minimum.
    """
    lowest = min(probabilities.values())
    return sorted(
        index
        for index, probability in probabilities.items()
        if abs(probability - lowest) < PROBABILITY_EPSILON
    )
