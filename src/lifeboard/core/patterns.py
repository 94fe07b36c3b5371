"""Named seed patterns, drawn as text pictures."""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .board import Board
from .cell import Position
from .errors import UnknownPatternError

logger = logging.getLogger(__name__)

ALIVE_MARK = "O"
DEAD_MARK = "."


class Pattern:
    """An arrangement of living cells anchored at its top-left corner.

    Cells are (column, row) offsets from the anchor. ``period`` is the number
    of generations after which the pattern repeats in place: 1 for still
    lifes, None when unknown or when the pattern travels.
    """

    def __init__(
        self,
        name: str,
        cells: Iterable[Tuple[int, int]],
        category: str = "custom",
        period: Optional[int] = None,
    ) -> None:
        self.name = name
        self.category = category
        self.period = period
        self.cells = tuple(sorted({Position(*cell) for cell in cells}, key=lambda p: (p.row, p.column)))

    @classmethod
    def from_picture(cls, name: str, picture: str, **kwargs) -> "Pattern":
        """Build a pattern from whitespace-separated rows of ``O`` and ``.``.

        Raises:
            ValueError: If the picture holds any other character
        """
        cells = []
        for row, line in enumerate(picture.split()):
            for column, mark in enumerate(line):
                if mark == ALIVE_MARK:
                    cells.append((column, row))
                elif mark != DEAD_MARK:
                    raise ValueError(f"Unexpected {mark!r} in picture of {name}")
        return cls(name, cells, **kwargs)

    @property
    def size(self) -> Tuple[int, int]:
        """(columns, rows) spanned from the anchor to the furthest living cell."""
        if not self.cells:
            return (0, 0)
        return (max(p.column for p in self.cells) + 1, max(p.row for p in self.cells) + 1)

    def positions(self, column: int = 0, row: int = 0) -> List[Position]:
        return [Position(p.column + column, p.row + row) for p in self.cells]

    def centre_on(self, board: Board) -> Tuple[int, int]:
        """Anchor that places the pattern in the middle of the board."""
        width, height = self.size
        return ((board.columns - width) // 2, (board.rows - height) // 2)

    def seed(self, board: Board, column: int = 0, row: int = 0, clear: bool = True) -> List[Position]:
        """Bring the pattern to life on a board with its anchor at (column, row).

        Cells are seeded in order and the first one off the board raises, so
        a pattern that does not fit is left partly seeded.

        Raises:
            PositionOutOfRangeError: If a cell falls outside the board
        """
        if clear:
            board.clear()

        positions = self.positions(column, row)
        board.seed_life(*positions)
        logger.debug("Seeded %s at (%d, %d)", self.name, column, row)
        return positions

    def __repr__(self) -> str:
        return f"Pattern({self.name!r}, {len(self.cells)} cells, period={self.period})"


BUILTIN_PATTERNS = (
    Pattern.from_picture("Block", "OO OO", category="still life", period=1),
    Pattern.from_picture("Beehive", ".OO. O..O .OO.", category="still life", period=1),
    Pattern.from_picture("Tub", ".O. O.O .O.", category="still life", period=1),
    Pattern.from_picture("Blinker", "OOO", category="oscillator", period=2),
    Pattern.from_picture("Toad", ".OOO OOO.", category="oscillator", period=2),
    Pattern.from_picture("Beacon", "OO.. O... ...O ..OO", category="oscillator", period=2),
    Pattern.from_picture(
        "Pentadecathlon",
        """
        ..O....O..
        OO.OOOO.OO
        ..O....O..
        """,
        category="oscillator",
        period=15,
    ),
    Pattern.from_picture("Glider", ".O. ..O OOO", category="spaceship"),
    Pattern.from_picture("R-pentomino", ".OO OO. .O.", category="methuselah"),
)


class PatternLibrary:
    """Patterns looked up by name, ignoring case."""

    def __init__(self, patterns: Iterable[Pattern] = BUILTIN_PATTERNS) -> None:
        self._patterns: Dict[str, Pattern] = {}
        for pattern in patterns:
            self.add(pattern)

    def add(self, pattern: Pattern) -> None:
        self._patterns[pattern.name.lower()] = pattern

    def get(self, name: str) -> Pattern:
        """Look up a pattern.

        Raises:
            UnknownPatternError: If no pattern has that name
        """
        try:
            return self._patterns[name.lower()]
        except KeyError:
            raise UnknownPatternError(
                f"Unknown pattern {name!r}, choose from: {', '.join(self.names())}"
            ) from None

    def names(self) -> List[str]:
        return [pattern.name for pattern in self]

    def by_category(self) -> Dict[str, List[Pattern]]:
        categories: Dict[str, List[Pattern]] = {}
        for pattern in self:
            categories.setdefault(pattern.category, []).append(pattern)
        return categories

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._patterns

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self._patterns.values())

    def __len__(self) -> int:
        return len(self._patterns)
