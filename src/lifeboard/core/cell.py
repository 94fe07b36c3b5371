"""Cell, position and life state primitives."""

from enum import Enum
from typing import List, NamedTuple, Optional, Tuple

from .errors import NeighbourLimitError, NotEnoughNeighboursError

MAX_NEIGHBOURS = 8
MIN_NEIGHBOURS = 3


class Position(NamedTuple):
    """Immutable (column, row) coordinate."""

    column: int
    row: int

    def __str__(self) -> str:
        return f"Column: {self.column}, Row: {self.row}"


class LifeState(Enum):
    """The two states a cell can be in."""

    DEAD = 0
    ALIVE = 1


def next_life_state(state: LifeState, alive_neighbours: int) -> LifeState:
    """Apply Conway's rule to a single cell.

    - Live cell with 2-3 live neighbours survives
    - Dead cell with exactly 3 live neighbours becomes alive
    - All other cells die or stay dead

    Args:
        state: Current state of the cell
        alive_neighbours: Number of live neighbours

    Returns:
        State of the cell in the next generation
    """
    if state is LifeState.ALIVE:
        if alive_neighbours < 2 or alive_neighbours > 3:
            return LifeState.DEAD
        return LifeState.ALIVE

    if alive_neighbours == 3:
        return LifeState.ALIVE
    return LifeState.DEAD


class Cell:
    """A single cell of a board.

    Neighbours are stored as flat indices into the owning board's cell arena,
    so a cell never holds references to other cells.
    """

    def __init__(self, position: Position, state: LifeState = LifeState.DEAD) -> None:
        """Initialize a cell.

        Args:
            position: Fixed position of the cell on its board
            state: Initial life state
        """
        self._position = Position(*position)
        self._state = state
        self._neighbours: List[int] = []
        self._next_state: Optional[LifeState] = None

    @property
    def position(self) -> Position:
        """Position of the cell."""
        return self._position

    @property
    def state(self) -> LifeState:
        """Current life state."""
        return self._state

    @property
    def is_alive(self) -> bool:
        """Whether the cell is currently alive."""
        return self._state is LifeState.ALIVE

    @property
    def neighbours(self) -> Tuple[int, ...]:
        """Arena indices of the neighbouring cells."""
        return tuple(self._neighbours)

    def bring_to_life(self) -> None:
        self._state = LifeState.ALIVE

    def kill(self) -> None:
        self._state = LifeState.DEAD

    def add_neighbours(self, *indices: int) -> None:
        """Link neighbouring cells by arena index.

        Raises:
            ValueError: If no indices are given
            NeighbourLimitError: If the cell would end up with more than eight neighbours
        """
        if not indices:
            raise ValueError("At least one neighbour index is required")

        if len(self._neighbours) + len(indices) > MAX_NEIGHBOURS:
            raise NeighbourLimitError(f"Maximum of {MAX_NEIGHBOURS} neighbour cells")

        self._neighbours.extend(indices)

    def calculate_next_state(self, alive_neighbours: int) -> LifeState:
        """Compute and store the pending state for the next generation.

        The current state is left untouched until commit() is called.

        Args:
            alive_neighbours: Number of neighbours alive in the current generation

        Returns:
            The pending next state

        Raises:
            NotEnoughNeighboursError: If the cell has fewer than three neighbours
            ValueError: If the count exceeds the number of neighbours
        """
        if len(self._neighbours) < MIN_NEIGHBOURS:
            raise NotEnoughNeighboursError(
                f"Cell at {self._position} has {len(self._neighbours)} neighbours, "
                f"at least {MIN_NEIGHBOURS} required"
            )

        if not 0 <= alive_neighbours <= len(self._neighbours):
            raise ValueError(
                f"Alive neighbour count {alive_neighbours} out of range "
                f"for a cell with {len(self._neighbours)} neighbours"
            )

        self._next_state = next_life_state(self._state, alive_neighbours)
        return self._next_state

    def commit(self) -> bool:
        """Replace the current state with the pending one.

        Returns:
            True if the state changed
        """
        if self._next_state is None:
            return False

        changed = self._next_state is not self._state
        self._state = self._next_state
        self._next_state = None
        return changed

    def __repr__(self) -> str:
        return f"Cell({self._position.column}, {self._position.row}, {self._state.name})"
