"""
Game controller: the state machine every collaborator talks to.

The controller owns the current Board snapshot and GameState, replaces
them together after each move and notifies subscribers. Illegal moves
are silent no-ops that return the unchanged snapshot.
"""
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple, Union

import numpy as np

from .board import Board, GameState
from .config import DEFAULT_CONFIG, BoardConfig, configure
from .flags import toggle_flag
from .generator import generate
from .reveal import Outcome, open_tile
from .tile import TileState

if TYPE_CHECKING:
    from agents.base_agent import BaseAgent

logger = logging.getLogger(__name__)


# ============================================================================
# Result Types
# ============================================================================

@dataclass(frozen=True)
class GameSnapshot:
    """Game state and board at one point in time."""

    state: GameState
    board: Board


@dataclass(frozen=True)
class OutcomeDelta:
    """What a single click changed."""

    opened: int
    outcome: Outcome


@dataclass(frozen=True)
class ClickResult:
    """Snapshot after a click plus the change it caused."""

    state: GameState
    board: Board
    delta: OutcomeDelta


@dataclass(frozen=True)
class TileView:
    """
    Display-facing view of a tile.

    Attributes:
        revealed: Whether the tile's value should be shown.
        flagged: Whether a flag is on the tile.
        value: Mine count, or MINE.
    """

    revealed: bool
    flagged: bool
    value: int


Listener = Callable[[GameSnapshot], None]


# ============================================================================
# Game Controller
# ============================================================================

class GameController:
    """
    Minesweeper session state machine.

    States:
        INITIAL: No mines laid, every tile hidden.
        PLAYING: Mines laid and at least one tile open.
        WIN: Every safe tile open.
        LOSE: A mine was opened; every mine is open.

    Mines are laid on the first click so it always opens a zero region.
    Reset returns to INITIAL from any state and halts the agent.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the controller.

        Args:
            config: Board configuration (default: 9x9 with 16 mines).
            seed: Random seed for mine placement.
        """
        self._config = config or DEFAULT_CONFIG
        self.rng = np.random.default_rng(seed)
        self._board = Board.blank(self._config)
        self._state = GameState.INITIAL
        self._agent: Optional["BaseAgent"] = None
        self._agent_active = False
        self._listeners: List[Listener] = []

    @classmethod
    def from_board(
        cls, board: Board, seed: Optional[int] = None
    ) -> "GameController":
        """
        Create a controller positioned on an existing board snapshot.

        The game state is derived from the board: INITIAL without mines,
        LOSE if a mine is open, WIN if every safe tile is open and
        PLAYING otherwise.
        """
        controller = cls(board.config, seed=seed)
        controller._board = board
        controller._state = _infer_state(board)
        return controller

    # ========================================================================
    # Read API
    # ========================================================================

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def board(self) -> Board:
        return self._board

    @property
    def config(self) -> BoardConfig:
        return self._config

    @property
    def agent(self) -> Optional["BaseAgent"]:
        return self._agent

    @property
    def agent_active(self) -> bool:
        return self._agent_active

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(self._state, self._board)

    def tile_views(self) -> Tuple[TileView, ...]:
        """
        Get per-tile display values.

        Once the game is over every mine is reported as revealed,
        including mines still hidden or flagged after a win.
        """
        game_over = self._state.is_over
        return tuple(
            TileView(
                revealed=tile.is_open or (game_over and tile.is_mine),
                flagged=tile.is_flagged,
                value=tile.mine_count,
            )
            for tile in self._board.tiles
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback run with the new snapshot after every change.

        Returns:
            Function that removes the callback again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ========================================================================
    # Configuration
    # ========================================================================

    def configure(
        self,
        width: Union[int, str],
        height: Union[int, str],
        mine_total: Union[int, str],
    ) -> BoardConfig:
        """
        Validate and install a new configuration, then reset.

        Raises:
            ConfigError: If the values are rejected. The previous
                configuration and board stay in effect.
        """
        config = configure(width, height, mine_total)
        self.reset(config)
        return config

    def reset(
        self,
        config: Optional[BoardConfig] = None,
        seed: Optional[int] = None,
    ) -> GameSnapshot:
        """
        Return to INITIAL with a fresh hidden board.

        Args:
            config: New configuration; keeps the current one if omitted.
            seed: Reseed the random source.
        """
        if config is not None:
            self._config = config
        if seed is not None:
            self.rng = np.random.default_rng(seed)
        self._agent_active = False
        self._commit(Board.blank(self._config), GameState.INITIAL)
        return self.snapshot()

    # ========================================================================
    # Moves
    # ========================================================================

    def click(self, index: int, by_agent: bool = False) -> ClickResult:
        """
        Open a tile.

        The first click in INITIAL lays the mines around it before
        opening.

        Args:
            index: Flat tile index.
            by_agent: Whether the move comes from the agent. Human moves
                are ignored while the agent is active, agent moves once
                a started agent has been halted.

        Returns:
            ClickResult with the new state, board and change.
        """
        if not self._accepts_move(index, by_agent):
            return self._unchanged_click()

        board = self._board
        if self._state == GameState.INITIAL:
            board = generate(board, index, self.rng)

        result = open_tile(board, index)
        if result.opened == 0:
            logger.debug(
                "Ignoring click on %s tile %d", board.state(index).name, index
            )
            return self._unchanged_click()

        state = _STATE_FOR_OUTCOME[result.outcome]
        self._commit(result.board, state)
        if state.is_over:
            logger.info(
                "Game over: %s after opening tile %d", state.name, index
            )

        return ClickResult(
            self._state,
            self._board,
            OutcomeDelta(result.opened, result.outcome),
        )

    def flag(self, index: int, by_agent: bool = False) -> GameSnapshot:
        """
        Toggle the flag on an unopened tile.

        Only legal while PLAYING; otherwise a no-op.
        """
        if self._state != GameState.PLAYING:
            return self.snapshot()
        if not self._accepts_move(index, by_agent):
            return self.snapshot()

        board = toggle_flag(self._board, index)
        if board is not self._board:
            self._commit(board, self._state)
        return self.snapshot()

    def force_lose(self) -> GameSnapshot:
        """End the game as lost, revealing every laid mine."""
        if self._state.is_over:
            return self.snapshot()

        board = self._board
        if board.mines_laid:
            board = board.with_states(
                {i: TileState.OPEN for i in board.mine_indices()}
            )
        self._agent_active = False
        self._commit(board, GameState.LOSE)
        return self.snapshot()

    def _accepts_move(self, index: int, by_agent: bool) -> bool:
        if self._state.is_over:
            logger.debug("Ignoring move on tile %d: game is over", index)
            return False
        if self._agent_active and not by_agent:
            logger.debug(
                "Ignoring human move on tile %d: agent is playing", index
            )
            return False
        if by_agent and self._agent is not None and not self._agent_active:
            logger.debug(
                "Ignoring agent move on tile %d: agent was halted", index
            )
            return False
        if not self._board.is_valid_index(index):
            logger.debug("Ignoring move on out-of-range tile %d", index)
            return False
        return True

    def _unchanged_click(self) -> ClickResult:
        return ClickResult(
            self._state, self._board, OutcomeDelta(0, Outcome.CONTINUE)
        )

    def _commit(self, board: Board, state: GameState) -> None:
        """Replace board and state together, then notify listeners."""
        self._board = board
        self._state = state
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # ========================================================================
    # Agent Driving
    # ========================================================================

    def start_agent(self, agent: Optional["BaseAgent"] = None) -> bool:
        """
        Hand the board to an agent.

        Only permitted in INITIAL. Human moves are ignored until the
        agent finishes or the game is reset.

        Args:
            agent: Agent to drive; a SolverAgent by default.

        Returns:
            True if the agent was started.
        """
        if self._state != GameState.INITIAL:
            logger.debug(
                "Agent can only start from INITIAL, not %s", self._state.name
            )
            return False

        if agent is None:
            from agents.solver_agent import SolverAgent
            agent = SolverAgent(self, seed=int(self.rng.integers(2**32)))

        self._agent = agent
        self._agent_active = True
        agent.reset()
        return True

    def stop_agent(self) -> None:
        self._agent_active = False

    def agent_step(self) -> GameSnapshot:
        """Advance the active agent by exactly one deduction pass."""
        if not self._agent_active or self._agent is None:
            return self.snapshot()

        self._agent.step()
        if self._state.is_over:
            self._agent_active = False
        return self.snapshot()


_STATE_FOR_OUTCOME = {
    Outcome.CONTINUE: GameState.PLAYING,
    Outcome.WIN: GameState.WIN,
    Outcome.LOSE: GameState.LOSE,
}


def _infer_state(board: Board) -> GameState:
    if not board.mines_laid:
        return GameState.INITIAL
    if any(tile.is_mine and tile.is_open for tile in board.tiles):
        return GameState.LOSE
    if board.all_safe_open:
        return GameState.WIN
    return GameState.PLAYING
