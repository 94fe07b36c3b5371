"""Command line runner: build a board, seed it and run it until it settles."""

import argparse
import logging
import time
import traceback
from typing import List, Optional

from ..core.board import Board
from ..core.errors import LifeboardError
from ..core.game import GameOfLife, Outcome, RunResult
from ..core.patterns import PatternLibrary

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lifeboard-cli",
        description="Run Conway's Game of Life on a bounded board until it settles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Pentadecathlon, centred on an 18x11 board
  %(prog)s -W 18 -H 11 --pattern pentadecathlon

  # Toad at a fixed corner, printing the board before and after
  %(prog)s -W 6 -H 6 --pattern toad --at 1 2 -g

  # Reproducible random soup counted with a convolution
  %(prog)s -W 40 -H 30 -p 0.25 --seed 7 --vectorized
        """,
    )

    parser.add_argument("-W", "--columns", type=int, default=50, help="Number of columns (default: 50)")
    parser.add_argument("-H", "--rows", type=int, help="Number of rows (default: same as columns)")
    parser.add_argument("--pattern", help="Seed a named pattern instead of random cells")
    parser.add_argument(
        "--at",
        nargs=2,
        type=int,
        metavar=("COLUMN", "ROW"),
        help="Top-left corner of the pattern (default: centred)",
    )
    parser.add_argument(
        "-p", "--population", type=float, default=0.1, help="Chance of each cell starting alive (default: 0.1)"
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible boards")
    parser.add_argument(
        "-m", "--max-generations", type=int, default=1000, help="Give up after this many generations (default: 1000)"
    )
    parser.add_argument("--vectorized", action="store_true", help="Count neighbours with a torch convolution")
    parser.add_argument("-g", "--show-board", action="store_true", help="Print the board before and after the run")
    parser.add_argument("--cells", action="store_true", help="Print boards cell by cell instead of as * and .")
    parser.add_argument("--list-patterns", action="store_true", help="List the built-in patterns and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print more statistics")
    parser.add_argument("--debug", action="store_true", help="Log every generation")
    return parser


def build_board(args: argparse.Namespace, library: PatternLibrary) -> Board:
    """Create the board described by the arguments and seed it.

    Raises:
        BoardSizeError: If a dimension is below the minimum
        UnknownPatternError: If the pattern is not in the library
        PositionOutOfRangeError: If the pattern does not fit where it is placed
        ValueError: If the population is not a probability
    """
    board = Board(args.columns, args.rows, vectorized=args.vectorized)

    if args.pattern is None:
        board.randomize(args.population, seed=args.seed)
        logger.debug("Random board with %d living cells", board.population)
    else:
        pattern = library.get(args.pattern)
        column, row = args.at if args.at else pattern.centre_on(board)
        pattern.seed(board, column, row)

    return board


def describe(result: RunResult) -> str:
    if result.outcome is Outcome.EXTINCT:
        return f"died out at generation {result.generation}"
    if result.outcome is Outcome.STILL_LIFE:
        return f"settled into a still life at generation {result.generation}"
    if result.outcome is Outcome.OSCILLATING:
        return f"repeats every {result.period} generations from generation {result.since}"
    return f"was still changing after {result.generation} generations"


def print_report(game: GameOfLife, result: RunResult, elapsed: float, verbose: bool = False) -> None:
    summary = game.summary()
    print(f"{summary['columns']}x{summary['rows']} board {describe(result)}")
    print(f"Population: {summary['initial_population']} -> {summary['population']}")

    if verbose:
        print(f"Peak population: {summary['peak_population']}")
        print(f"Density: {summary['density']:.1%}")
        box = summary["bounding_box"]
        if box:
            print(f"Living cells span ({box[0]}, {box[1]}) to ({box[2]}, {box[3]})")
        rate = result.generation / elapsed if elapsed > 0 else 0.0
        print(f"Time: {elapsed:.3f}s ({rate:.0f} generations/s)")


def list_patterns(library: PatternLibrary) -> None:
    for category, patterns in library.by_category().items():
        print(f"{category.title()}:")
        for pattern in patterns:
            columns, rows = pattern.size
            period = f", period {pattern.period}" if pattern.period else ""
            print(f"  {pattern.name:<16} {columns}x{rows}{period}")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``lifeboard-cli``.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = create_parser().parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")

    library = PatternLibrary()
    if args.list_patterns:
        list_patterns(library)
        return 0

    try:
        board = build_board(args, library)
        game = GameOfLife(board)

        if args.show_board:
            print("Initial board:")
            print(board.render(compact=not args.cells))
            print()

        started = time.perf_counter()
        result = game.run(args.max_generations)
        elapsed = time.perf_counter() - started

        if args.show_board:
            print(f"Board at generation {result.generation}:")
            print(board.render(compact=not args.cells))
            print()

        print_report(game, result, elapsed, verbose=args.verbose)
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except (LifeboardError, ValueError) as e:
        print(f"Error: {e}")
        if args.verbose:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
