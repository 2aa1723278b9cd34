"""
Unit tests for the game controller.

Tests the state machine, illegal-move handling, configuration,
subscriptions and agent hand-off.
"""
from typing import List

import pytest
from agents import SolverAgent
from engine import (
    MINE,
    Board,
    BoardConfig,
    ConfigError,
    GameController,
    GameSnapshot,
    GameState,
    Outcome,
    OutcomeDelta,
    TileState,
)


# ============================================================================
# Initialization Tests
# ============================================================================

class TestControllerInit:
    """Test controller construction."""

    def test_starts_in_initial(self, default_controller) -> None:
        assert default_controller.state == GameState.INITIAL
        assert default_controller.board.mines_laid is False
        assert default_controller.board.open_count == 0

    def test_default_config(self, default_controller) -> None:
        config = default_controller.config
        assert (config.width, config.height, config.mine_total) == (9, 9, 16)

    def test_agent_inactive(self, default_controller) -> None:
        assert default_controller.agent is None
        assert default_controller.agent_active is False


# ============================================================================
# Click Tests
# ============================================================================

class TestClick:
    """Test opening tiles through the controller."""

    def test_first_click_opens_zero_region(
        self, beginner_controller
    ) -> None:
        result = beginner_controller.click(40)
        board = result.board

        assert board.mines_laid is True
        assert len(board.mine_indices()) == 10
        assert board.mine_count(40) == 0
        assert result.delta.opened == board.open_count > 1
        assert result.state in (GameState.PLAYING, GameState.WIN)

    @pytest.mark.parametrize("seed", range(20))
    def test_first_click_never_loses(self, seed: int) -> None:
        controller = GameController(BoardConfig(16, 16, 76), seed=seed)
        result = controller.click(seed * 7 % 256)
        assert result.state != GameState.LOSE
        assert result.delta.outcome != Outcome.LOSE

    def test_same_seed_same_game(self) -> None:
        first = GameController(BoardConfig(9, 9, 10), seed=5)
        second = GameController(BoardConfig(9, 9, 10), seed=5)
        assert (
            first.click(40).board.mine_indices()
            == second.click(40).board.mine_indices()
        )

    def test_click_open_tile_is_noop(self, beginner_controller) -> None:
        board = beginner_controller.click(40).board
        result = beginner_controller.click(40)
        assert result.board is board
        assert result.delta.opened == 0
        assert result.delta.outcome == Outcome.CONTINUE

    @pytest.mark.parametrize("index", [-1, 81, 1000])
    def test_out_of_range_is_noop(
        self, beginner_controller, index: int
    ) -> None:
        result = beginner_controller.click(index)
        assert result.state == GameState.INITIAL
        assert result.delta.opened == 0
        assert beginner_controller.board.mines_laid is False

    def test_clicking_mine_loses(self, board_factory) -> None:
        board = board_factory(4, 4, [0, 15], opened=[5])
        controller = GameController.from_board(board)
        result = controller.click(0)

        assert result.state == GameState.LOSE
        assert result.delta.outcome == Outcome.LOSE
        assert controller.board.state(0) == TileState.OPEN
        assert controller.board.state(15) == TileState.OPEN

    def test_last_safe_tile_wins(self, board_factory) -> None:
        board = board_factory(4, 4, [15], opened=range(14))
        controller = GameController.from_board(board)
        result = controller.click(14)
        assert result.state == GameState.WIN
        assert result.delta == OutcomeDelta(opened=1, outcome=Outcome.WIN)

    def test_moves_ignored_after_game_over(self, board_factory) -> None:
        board = board_factory(4, 4, [0, 15], opened=[5])
        controller = GameController.from_board(board)
        controller.click(0)
        lost = controller.board

        assert controller.click(10).board is lost
        assert controller.flag(10).board is lost
        assert controller.state == GameState.LOSE


# ============================================================================
# Flag Tests
# ============================================================================

class TestFlag:
    """Test flag toggling through the controller."""

    def test_flag_ignored_in_initial(self, default_controller) -> None:
        snapshot = default_controller.flag(0)
        assert snapshot.state == GameState.INITIAL
        assert snapshot.board.flagged_count == 0

    def test_flag_toggles_while_playing(self, board_factory) -> None:
        controller = GameController.from_board(
            board_factory(4, 4, [15], opened=[0])
        )
        assert controller.flag(15).board.state(15) == TileState.FLAGGED
        assert controller.flag(15).board.state(15) == TileState.HIDDEN
        assert controller.state == GameState.PLAYING

    def test_flag_on_open_tile_is_noop(self, board_factory) -> None:
        controller = GameController.from_board(
            board_factory(4, 4, [15], opened=[0])
        )
        board = controller.board
        assert controller.flag(0).board is board

    def test_flagged_tile_cannot_be_clicked(self, board_factory) -> None:
        controller = GameController.from_board(
            board_factory(4, 4, [15], opened=[0], flagged=[15])
        )
        result = controller.click(15)
        assert result.delta.opened == 0
        assert controller.state == GameState.PLAYING


# ============================================================================
# Force Lose Tests
# ============================================================================

class TestForceLose:
    """Test ending a game without a mine click."""

    def test_force_lose_reveals_mines(self, board_factory) -> None:
        controller = GameController.from_board(
            board_factory(4, 4, [0, 15], opened=[5], flagged=[15])
        )
        snapshot = controller.force_lose()
        assert snapshot.state == GameState.LOSE
        assert snapshot.board.state(0) == TileState.OPEN
        assert snapshot.board.state(15) == TileState.OPEN

    def test_force_lose_from_initial(self, default_controller) -> None:
        snapshot = default_controller.force_lose()
        assert snapshot.state == GameState.LOSE
        assert snapshot.board.open_count == 0

    def test_force_lose_after_win_is_noop(self, board_factory) -> None:
        controller = GameController.from_board(
            board_factory(4, 4, [15], opened=range(15))
        )
        assert controller.state == GameState.WIN
        assert controller.force_lose().state == GameState.WIN


# ============================================================================
# Reset and Configure Tests
# ============================================================================

class TestResetAndConfigure:
    """Test returning to INITIAL and changing configuration."""

    def test_reset_after_loss(self, board_factory) -> None:
        controller = GameController.from_board(
            board_factory(4, 4, [0, 15], opened=[5])
        )
        controller.click(0)
        snapshot = controller.reset()
        assert snapshot.state == GameState.INITIAL
        assert snapshot.board.mines_laid is False
        assert snapshot.board.open_count == 0

    def test_reset_with_seed_reproduces(self, beginner_controller) -> None:
        beginner_controller.reset(seed=3)
        first = beginner_controller.click(0).board.mine_indices()
        beginner_controller.reset(seed=3)
        second = beginner_controller.click(0).board.mine_indices()
        assert first == second

    def test_configure_installs_and_resets(
        self, beginner_controller
    ) -> None:
        beginner_controller.click(40)
        config = beginner_controller.configure("16", "8", "30")
        assert beginner_controller.config == config
        assert beginner_controller.state == GameState.INITIAL
        assert beginner_controller.board.tile_count == 128

    @pytest.mark.parametrize(
        "width, height, mines",
        [(3, 9, 10), (9, 17, 10), (9, 9, 7), (9, 9, 25), ("x", 9, 10)],
    )
    def test_rejected_configure_keeps_game(
        self, beginner_controller, width, height, mines
    ) -> None:
        board = beginner_controller.click(40).board
        with pytest.raises(ConfigError):
            beginner_controller.configure(width, height, mines)
        assert beginner_controller.config == BoardConfig(9, 9, 10)
        assert beginner_controller.board is board
        assert beginner_controller.state != GameState.INITIAL


# ============================================================================
# Subscription Tests
# ============================================================================

class TestSubscribe:
    """Test change notifications."""

    def test_listener_gets_each_change(self, beginner_controller) -> None:
        seen: List[GameSnapshot] = []
        beginner_controller.subscribe(seen.append)

        beginner_controller.click(40)
        beginner_controller.click(40)
        beginner_controller.reset()

        assert [snapshot.state for snapshot in seen][-1] == GameState.INITIAL
        assert len(seen) == 2
        assert seen[0].board.mines_laid is True

    def test_unsubscribe(self, beginner_controller) -> None:
        seen: List[GameSnapshot] = []
        unsubscribe = beginner_controller.subscribe(seen.append)
        unsubscribe()
        beginner_controller.click(40)
        assert seen == []


# ============================================================================
# Board Inference Tests
# ============================================================================

class TestFromBoard:
    """Test deriving the state from an existing board."""

    def test_playing(self, board_factory) -> None:
        controller = GameController.from_board(
            board_factory(4, 4, [15], opened=[0])
        )
        assert controller.state == GameState.PLAYING

    def test_win(self, board_factory) -> None:
        controller = GameController.from_board(
            board_factory(4, 4, [15], opened=range(15))
        )
        assert controller.state == GameState.WIN

    def test_lose(self, board_factory) -> None:
        controller = GameController.from_board(
            board_factory(4, 4, [15], opened=[15])
        )
        assert controller.state == GameState.LOSE

    def test_initial(self, valid_config) -> None:
        controller = GameController.from_board(Board.blank(valid_config))
        assert controller.state == GameState.INITIAL


# ============================================================================
# Tile View Tests
# ============================================================================

class TestTileViews:
    """Test display values."""

    def test_mines_hidden_while_playing(self, board_factory) -> None:
        controller = GameController.from_board(
            board_factory(4, 4, [15], opened=[0])
        )
        views = controller.tile_views()
        assert views[0].revealed is True
        assert views[0].value == 0
        assert views[15].revealed is False

    def test_mines_revealed_after_win(self, board_factory) -> None:
        controller = GameController.from_board(
            board_factory(4, 4, [15], opened=range(14), flagged=[15])
        )
        controller.click(14)
        view = controller.tile_views()[15]
        assert view.revealed is True
        assert view.flagged is True
        assert view.value == MINE


# ============================================================================
# Agent Hand-off Tests
# ============================================================================

class TestAgentDriving:
    """Test starting, stepping and stopping the agent."""

    def test_agent_plays_to_completion(self, beginner_controller) -> None:
        assert beginner_controller.start_agent() is True
        steps = 0
        while beginner_controller.agent_active:
            beginner_controller.agent_step()
            steps += 1

        assert beginner_controller.state.is_over
        assert steps <= beginner_controller.config.tile_count

    def test_agent_only_starts_from_initial(
        self, beginner_controller
    ) -> None:
        beginner_controller.click(40)
        assert beginner_controller.start_agent() is False
        assert beginner_controller.agent_active is False

    def test_human_moves_ignored_while_agent_plays(
        self, beginner_controller
    ) -> None:
        beginner_controller.start_agent()
        result = beginner_controller.click(40)
        assert result.delta.opened == 0
        assert beginner_controller.state == GameState.INITIAL

    def test_human_moves_accepted_after_stop(
        self, beginner_controller
    ) -> None:
        beginner_controller.start_agent()
        beginner_controller.stop_agent()
        assert beginner_controller.click(40).delta.opened > 0

    def test_reset_halts_agent(self, beginner_controller) -> None:
        beginner_controller.start_agent()
        beginner_controller.agent_step()
        beginner_controller.reset()

        assert beginner_controller.agent_active is False
        snapshot = beginner_controller.agent_step()
        assert snapshot.state == GameState.INITIAL
        assert snapshot.board.open_count == 0

    def test_step_without_agent_is_noop(self, default_controller) -> None:
        snapshot = default_controller.agent_step()
        assert snapshot.state == GameState.INITIAL


# ============================================================================
# Reset During Agent Pass Tests
# ============================================================================

CORNER_MINES = [10, 60, 61, 62, 69, 70, 71, 78, 79, 80]


class TestResetDuringPass:
    """A reset stops the agent even in the middle of a pass."""

    def test_listener_reset_stops_certain_opens(self, board_factory) -> None:
        """Clue 0 with mine 10 flagged makes the pass open 1 and 9."""
        board = board_factory(9, 9, CORNER_MINES, opened=[0], flagged=[10])
        controller = GameController.from_board(board, seed=0)
        agent = SolverAgent(controller, seed=0)

        seen: List[GameState] = []

        def reset_once(snapshot: GameSnapshot) -> None:
            seen.append(snapshot.state)
            if len(seen) == 1:
                controller.reset()

        controller.subscribe(reset_once)
        agent.step()

        assert seen == [GameState.PLAYING, GameState.INITIAL]
        assert controller.state == GameState.INITIAL
        assert controller.board.mines_laid is False
        assert controller.board.open_count == 0

    def test_halted_agent_moves_are_ignored(
        self, beginner_controller
    ) -> None:
        agent = SolverAgent(beginner_controller, seed=0)
        beginner_controller.start_agent(agent)
        beginner_controller.reset()

        agent.step()
        assert beginner_controller.state == GameState.INITIAL
        assert beginner_controller.board.mines_laid is False

    def test_restarted_agent_plays_again(self, beginner_controller) -> None:
        agent = SolverAgent(beginner_controller, seed=0)
        beginner_controller.start_agent(agent)
        beginner_controller.reset()
        assert beginner_controller.start_agent(agent) is True

        snapshot = beginner_controller.agent_step()
        assert snapshot.state != GameState.INITIAL
