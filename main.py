#!/usr/bin/env python3
"""
Minesweeper agent - Main entry point.

Usage:
    python main.py watch [--games N] [--delay S]
    python main.py evaluate [--agent {solver,random}] [--games N]
    python main.py compare [--games N]
"""
import argparse
import logging
import os
import time

from agents import RandomAgent, SolverAgent
from engine import (
    ConfigError,
    GameController,
    GameState,
    configure,
    render_text,
)
from evaluation import Evaluator

AGENTS = {
    "solver": SolverAgent,
    "random": RandomAgent,
}


def clear_screen() -> None:
    os.system('cls' if os.name == 'nt' else 'clear')


def watch(args: argparse.Namespace) -> None:
    """Watch the solver play games in the terminal."""
    config = configure(args.width, args.height, args.mines)
    controller = GameController(config, seed=args.seed)

    print(
        f"Board: {config.width}x{config.height} with {config.mine_total} mines "
        f"({100 * config.mine_total / config.tile_count:.1f}% density)"
    )
    wins = 0

    for game in range(args.games):
        controller.reset()
        controller.start_agent()
        step = 0

        while controller.agent_active:
            snapshot = controller.agent_step()
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{args.games} | Step {step} ===")
            print(f"Wins so far: {wins}\n")
            print(render_text(snapshot.board, snapshot.state.is_over))
            time.sleep(args.delay)

        if controller.state == GameState.WIN:
            wins += 1
            print("\n*** WIN! ***")
        else:
            print("\n*** LOST (hit mine) ***")
        time.sleep(1.0)

    print(f"\n=== Final: {wins}/{args.games} wins ===")


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate a single agent."""
    config = configure(args.width, args.height, args.mines)
    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)

    print(f"\nEvaluating {args.agent} over {args.games} games...")
    results = evaluator.evaluate(AGENTS[args.agent]).to_dict()

    print(f"Results for {args.agent}:")
    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Avg steps: {results['avg_steps']:.1f}")
    print(f"  Max steps: {results['max_steps']}")
    print(f"  Avg revealed: {results['avg_revealed']:.1f} tiles")
    print(f"  Avg flagged: {results['avg_flagged']:.1f} tiles")


def compare(args: argparse.Namespace) -> None:
    """Compare all agents on the same seeded games."""
    config = configure(args.width, args.height, args.mines)
    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)
    results = evaluator.compare(AGENTS)

    print("\n" + "=" * 50)
    print("Agent Comparison Results")
    print("=" * 50)
    print(f"{'Agent':<20} {'Win Rate':<12} {'Avg Steps':<12} {'Max Steps':<10}")
    print("-" * 50)

    for name, stats in results.items():
        metrics = stats.to_dict()
        print(
            f"{name:<20} {metrics['win_rate']:>10.1%} "
            f"{metrics['avg_steps']:>10.1f} "
            f"{metrics['max_steps']:>10d}"
        )


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", default="9", help="Board width (4-16)")
    parser.add_argument("--height", default="9", help="Board height (4-16)")
    parser.add_argument(
        "--mines", default="16", help="Number of mines (10%%-30%% of tiles)"
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper agent - watch and evaluate solving agents"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every agent move"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Watch command
    watch_parser = subparsers.add_parser("watch", help="Watch the solver play")
    add_board_arguments(watch_parser)
    watch_parser.add_argument(
        "--delay", type=float, default=1.0, help="Delay between moves"
    )
    watch_parser.add_argument(
        "--games", type=int, default=1, help="Number of games"
    )

    # Evaluate command
    eval_parser = subparsers.add_parser("evaluate", help="Evaluate an agent")
    add_board_arguments(eval_parser)
    eval_parser.add_argument(
        "--agent",
        choices=sorted(AGENTS),
        default="solver",
        help="Agent to evaluate",
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Compare all agents")
    add_board_arguments(compare_parser)
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per agent"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {"watch": watch, "evaluate": evaluate, "compare": compare}
    if args.command not in commands:
        parser.print_help()
        return

    try:
        commands[args.command](args)
    except ConfigError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
