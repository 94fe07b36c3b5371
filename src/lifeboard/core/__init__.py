"""Core board and cell logic."""

from .cell import Cell, LifeState, Position
from .board import Board
from .game import GameOfLife, Outcome, RunResult
from .patterns import Pattern, PatternLibrary

__all__ = ["Cell", "LifeState", "Position", "Board", "GameOfLife", "Outcome", "RunResult", "Pattern", "PatternLibrary"]
