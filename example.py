#!/usr/bin/env python3
"""
Example usage of the lifeboard package.
"""

from lifeboard import Board, GameOfLife, PatternLibrary


def main():
    """Demonstrate programmatic usage of the lifeboard package."""
    populations = []
    board = Board(18, 11, on_generation_finished=lambda b: populations.append(b.population))

    pentadecathlon = PatternLibrary().get("Pentadecathlon")
    pentadecathlon.seed(board, *pentadecathlon.centre_on(board))
    initial = str(board)
    game = GameOfLife(board)

    print("Initial state:")
    print(board.render(compact=True))
    print()

    for _ in range(pentadecathlon.period):
        changed = game.step()
        print(f"Generation {game.generation}: {len(changed)} cells changed, population {game.population}")

    print()
    print(f"Back to the seed after {game.period} generations: {str(board) == initial}")
    print(f"Populations seen by the listener: {populations}")

    print("Summary:")
    for key, value in game.summary().items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
