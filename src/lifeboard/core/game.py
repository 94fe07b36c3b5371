"""Simulation driver that follows a board until it settles."""

import logging
from enum import Enum
from typing import Any, Dict, FrozenSet, List, NamedTuple, Optional

from .board import Board
from .cell import Position

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """How a run ended."""

    EXTINCT = "extinct"
    STILL_LIFE = "still life"
    OSCILLATING = "oscillating"
    UNSETTLED = "unsettled"


class RunResult(NamedTuple):
    generation: int
    outcome: Outcome
    period: Optional[int] = None
    since: Optional[int] = None


class GameOfLife:
    """Follows the generations of a board and notices when it repeats itself.

    The game registers a listener on the board, so generations advanced by
    calling ``board.generate()`` directly are counted too. Each generation is
    keyed by the set of its living positions. The first key to come round a
    second time fixes the period and the generation the repetition started at.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.generation = 0
        self.populations: List[int] = []
        self.last_changed: List[Position] = []
        self.period: Optional[int] = None
        self.since: Optional[int] = None
        self._seen: Dict[FrozenSet[Position], int] = {}

        self._record()
        board.add_generation_listener(self._on_generation_finished)

    @property
    def population(self) -> int:
        return self.populations[-1]

    def _on_generation_finished(self, board: Board) -> None:
        self.generation += 1
        self._record()

    def _record(self) -> None:
        alive = frozenset(self.board.alive_positions())
        self.populations.append(len(alive))

        if self.period is not None:
            return

        first = self._seen.setdefault(alive, self.generation)
        if first != self.generation:
            self.period = self.generation - first
            self.since = first
            logger.debug("Generation %d repeats generation %d (period %d)", self.generation, first, self.period)

    def step(self) -> List[Position]:
        """Advance one generation and return the positions that changed."""
        self.last_changed = self.board.generate()
        return self.last_changed

    def run(self, max_generations: int = 1000) -> RunResult:
        """Step until the board dies out, stops changing or repeats a generation.

        Args:
            max_generations: Most generations to advance in this call

        Returns:
            RunResult with the generation reached and how the run ended

        Raises:
            ValueError: If max_generations is negative
        """
        if max_generations < 0:
            raise ValueError(f"Max generations must not be negative, got {max_generations}")

        for _ in range(max_generations):
            changed = self.step()

            if self.population == 0:
                return RunResult(self.generation, Outcome.EXTINCT)
            if not changed:
                return RunResult(self.generation, Outcome.STILL_LIFE, 1, self.generation - 1)
            if self.period is not None:
                return RunResult(self.generation, Outcome.OSCILLATING, self.period, self.since)

        logger.info("No stable state within %d generations", max_generations)
        return RunResult(self.generation, Outcome.UNSETTLED)

    def restart(self) -> None:
        """Start counting again from the board as it is now.

        Call this after seeding or killing cells by hand, since earlier
        generations no longer lead to the current one.
        """
        self.generation = 0
        self.populations.clear()
        self.last_changed = []
        self.period = None
        self.since = None
        self._seen.clear()
        self._record()

    def detach(self) -> None:
        """Stop following the board."""
        self.board.remove_generation_listener(self._on_generation_finished)

    def summary(self) -> Dict[str, Any]:
        columns, rows = self.board.shape
        return {
            "columns": columns,
            "rows": rows,
            "generation": self.generation,
            "initial_population": self.populations[0],
            "population": self.population,
            "peak_population": max(self.populations),
            "density": self.population / (columns * rows),
            "period": self.period,
            "since": self.since,
            "bounding_box": self.board.get_bounding_box(),
        }
