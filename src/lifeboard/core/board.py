"""Board data structure owning the cells and driving generations."""

import logging
import operator
from typing import Callable, Iterator, List, Optional, Tuple, Union

import numpy as np
import torch
import torch.nn.functional as F

from .cell import Cell, Position
from .errors import BoardSizeError, PositionOutOfRangeError

logger = logging.getLogger(__name__)

MINIMUM_BOARD_SIZE = 2

# Column/row offsets in linking order: right, below-right, below, below-left,
# left, above-left, above, above-right. Rows grow downwards.
NEIGHBOUR_OFFSETS = ((1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1), (0, -1), (1, -1))

PositionLike = Union[Position, Tuple[int, int]]
GenerationListener = Callable[["Board"], None]


def _board_dimension(name: str, size) -> int:
    try:
        size = operator.index(size)
    except TypeError:
        raise BoardSizeError(f"Board {name} must be an integer, got {size!r}") from None

    if size < MINIMUM_BOARD_SIZE:
        raise BoardSizeError(f"Board {name} must be at least {MINIMUM_BOARD_SIZE}, got {size}")
    return size


class Board:
    """A bounded rectangular board of cells for Conway's Game of Life.

    Cells live in a flat row-major arena and refer to their neighbours by arena
    index. The adjacency is built once at construction; cells outside the board
    are never linked (no wraparound).
    """

    def __init__(
        self,
        columns: int,
        rows: Optional[int] = None,
        *,
        vectorized: bool = False,
        on_generation_finished: Optional[GenerationListener] = None,
    ) -> None:
        """Initialize a new board with every cell dead.

        Args:
            columns: Number of columns
            rows: Number of rows (defaults to columns for a square board)
            vectorized: Count neighbours with a convolution instead of the adjacency lists
            on_generation_finished: Optional callback invoked after each committed generation

        Raises:
            BoardSizeError: If either dimension is smaller than two
        """
        if rows is None:
            rows = columns

        columns = _board_dimension("columns", columns)
        rows = _board_dimension("rows", rows)
        self.columns = columns
        self.rows = rows
        self.vectorized = vectorized
        self._listeners: List[GenerationListener] = []
        if on_generation_finished is not None:
            self.add_generation_listener(on_generation_finished)

        self._cells = [Cell(Position(column, row)) for row in range(rows) for column in range(columns)]
        self._matrix = tuple(
            tuple(self._cells[self._index(column, row)] for row in range(rows)) for column in range(columns)
        )
        self._build_relationships()

        # Zero-padded convolution matches the bounded adjacency
        self._torch_input = torch.zeros(1, 1, rows, columns, dtype=torch.float32)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

        logger.debug("Built %dx%d board with %d cells", columns, rows, len(self._cells))

    def _index(self, column: int, row: int) -> int:
        return row * self.columns + column

    def _build_relationships(self) -> None:
        for cell in self._cells:
            column, row = cell.position
            for d_column, d_row in NEIGHBOUR_OFFSETS:
                neighbour_column, neighbour_row = column + d_column, row + d_row
                if 0 <= neighbour_column < self.columns and 0 <= neighbour_row < self.rows:
                    cell.add_neighbours(self._index(neighbour_column, neighbour_row))

    @property
    def shape(self) -> Tuple[int, int]:
        """Board dimensions as (columns, rows)."""
        return (self.columns, self.rows)

    @property
    def cells(self) -> Tuple[Tuple[Cell, ...], ...]:
        """Read-only cell matrix indexed as cells[column][row]."""
        return self._matrix

    @property
    def population(self) -> int:
        """Number of living cells."""
        return sum(1 for cell in self._cells if cell.is_alive)

    def cell(self, column: int, row: int) -> Cell:
        """Look up the cell at the given coordinates.

        Raises:
            TypeError: If a coordinate is not an integer
            PositionOutOfRangeError: If the coordinates are outside the board
        """
        try:
            column, row = operator.index(column), operator.index(row)
        except TypeError:
            raise TypeError(f"Coordinates must be integers, got ({column!r}, {row!r})") from None

        if not (0 <= column < self.columns and 0 <= row < self.rows):
            raise PositionOutOfRangeError(
                f"Position ({column}, {row}) outside {self.columns}x{self.rows} board"
            )
        return self._cells[self._index(column, row)]

    def __getitem__(self, position: PositionLike) -> Cell:
        column, row = position
        return self.cell(column, row)

    def __iter__(self) -> Iterator[Cell]:
        """Iterate over cells in row-major order."""
        return iter(self._cells)

    def neighbours_of(self, position: PositionLike) -> List[Cell]:
        """Get the neighbouring cells of the cell at a position."""
        return [self._cells[index] for index in self[position].neighbours]

    def has_neighbour(self, position: PositionLike, other: PositionLike) -> bool:
        """Whether the cell at ``other`` is linked as a neighbour of the cell at ``position``."""
        target = self._index(*self[other].position)
        return target in self[position].neighbours

    def seed_life(self, *positions: PositionLike) -> None:
        """Bring the cells at the given positions to life.

        Positions are checked one at a time, so the positions preceding an
        invalid one remain alive.

        Raises:
            PositionOutOfRangeError: On the first position outside the board
        """
        for position in positions:
            self[position].bring_to_life()

    def kill_life(self, *positions: PositionLike) -> None:
        """Kill the cells at the given positions, with the same bounds policy as seed_life()."""
        for position in positions:
            self[position].kill()

    def clear(self) -> None:
        """Kill every cell."""
        for cell in self._cells:
            cell.kill()

    def randomize(self, probability: float = 0.1, seed: Optional[int] = None) -> None:
        """Randomly populate the board.

        Args:
            probability: Chance each cell will be alive (0.0 to 1.0)
            seed: Optional seed for reproducible boards
        """
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Probability must be between 0.0 and 1.0, got {probability}")

        rng = np.random.default_rng(seed)
        mask = rng.random((self.columns, self.rows)) < probability
        for cell in self._cells:
            if mask[cell.position]:
                cell.bring_to_life()
            else:
                cell.kill()

    def add_generation_listener(self, listener: GenerationListener) -> None:
        """Register a callback invoked with the board after every committed generation."""
        self._listeners.append(listener)

    def remove_generation_listener(self, listener: GenerationListener) -> None:
        """Unregister a generation callback.

        Raises:
            ValueError: If the callback was not registered
        """
        self._listeners.remove(listener)

    def generate(self) -> List[Position]:
        """Advance the board by one generation.

        Every cell's next state is computed from the current generation before
        any cell is updated, then all cells commit together. Listeners are
        notified once the commit has finished.

        Returns:
            Positions of the cells that changed state, in row-major order
        """
        self._evaluate()
        changed = self._commit()

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Generation committed, %d cells changed:\n%s", len(changed), self.render())

        for listener in list(self._listeners):
            listener(self)

        return changed

    def _evaluate(self) -> None:
        if self.vectorized:
            counts = self.neighbour_counts()
            for cell in self._cells:
                cell.calculate_next_state(int(counts[cell.position]))
            return

        cells = self._cells
        for cell in cells:
            alive = sum(1 for index in cell.neighbours if cells[index].is_alive)
            cell.calculate_next_state(alive)

    def _commit(self) -> List[Position]:
        return [cell.position for cell in self._cells if cell.commit()]

    def to_array(self) -> np.ndarray:
        """Snapshot of the current states as an int8 array of shape (columns, rows)."""
        states = np.fromiter((cell.state.value for cell in self._cells), dtype=np.int8, count=len(self._cells))
        return np.ascontiguousarray(states.reshape(self.rows, self.columns).T)

    def neighbour_counts(self) -> np.ndarray:
        """Count live neighbours for all cells using a PyTorch convolution.

        Returns:
            int8 array of shape (columns, rows) with the neighbour count of each cell
        """
        # Board arrays are (columns, rows) but PyTorch expects (height, width)
        self._torch_input[0, 0] = torch.from_numpy(np.ascontiguousarray(self.to_array().T, dtype=np.float32))
        neighbours = F.conv2d(self._torch_input, self._torch_kernel, padding=1)
        return neighbours[0, 0].numpy().astype(np.int8).T

    def alive_positions(self) -> List[Position]:
        """Positions of all living cells in row-major order."""
        return [cell.position for cell in self._cells if cell.is_alive]

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_column, min_row, max_column, max_row) or None if no living cells
        """
        living = np.where(self.to_array() > 0)
        if len(living[0]) == 0:
            return None

        min_column, max_column = int(living[0].min()), int(living[0].max())
        min_row, max_row = int(living[1].min()), int(living[1].max())
        return (min_column, min_row, max_column, max_row)

    def render(self, compact: bool = False) -> str:
        """Render the board as text, one line per row.

        The default format shows each cell as ``| [+](C,R) |`` for alive and
        ``| [-](C,R) |`` for dead, with coordinates zero-padded to the width
        of the board's column and row counts. The compact format uses ``*``
        and ``.`` with one character per cell.
        """
        if compact:
            return "\n".join(
                "".join("*" if self._matrix[column][row].is_alive else "." for column in range(self.columns))
                for row in range(self.rows)
            )

        column_width = len(str(self.columns))
        row_width = len(str(self.rows))
        lines = []
        for row in range(self.rows):
            tokens = []
            for column in range(self.columns):
                symbol = "+" if self._matrix[column][row].is_alive else "-"
                tokens.append(f"| [{symbol}]({column:0{column_width}d},{row:0{row_width}d}) |")
            lines.append("".join(tokens))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board(columns={self.columns}, rows={self.rows}, population={self.population})"

