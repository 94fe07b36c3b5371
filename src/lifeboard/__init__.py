"""Conway's Game of Life on a bounded board of linked cells."""

__version__ = "0.1.0"

from .core.cell import Cell, LifeState, Position
from .core.board import Board
from .core.game import GameOfLife, Outcome, RunResult
from .core.patterns import Pattern, PatternLibrary
from .core.errors import (
    LifeboardError,
    BoardSizeError,
    PositionOutOfRangeError,
    NeighbourLimitError,
    NotEnoughNeighboursError,
    UnknownPatternError,
)

__all__ = [
    "Cell",
    "LifeState",
    "Position",
    "Board",
    "GameOfLife",
    "Outcome",
    "RunResult",
    "Pattern",
    "PatternLibrary",
    "LifeboardError",
    "BoardSizeError",
    "PositionOutOfRangeError",
    "NeighbourLimitError",
    "NotEnoughNeighboursError",
    "UnknownPatternError",
]
