"""Exceptions raised by the board engine."""


class LifeboardError(Exception):
    """Base class for all board engine errors."""


class BoardSizeError(LifeboardError, ValueError):
    """Raised when a board is constructed with invalid dimensions."""


class PositionOutOfRangeError(LifeboardError, IndexError):
    """Raised when a position falls outside the board."""


class NeighbourLimitError(LifeboardError, RuntimeError):
    """Raised when a cell would be linked to more than eight neighbours."""


class NotEnoughNeighboursError(LifeboardError, RuntimeError):
    """Raised when a cell with fewer than three neighbours is evaluated."""


class UnknownPatternError(LifeboardError, LookupError):
    """Raised when a pattern name is not in the library."""
