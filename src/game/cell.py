"""
Cell module for Minesweeper game.

Represents a single grid unit: whether it holds a mine, whether it has
been opened or flagged, and the display status derived from those.
"""
from enum import Enum, auto

from .errors import InternalInvariantError


# ============================================================================
# Constants
# ============================================================================

class CalculatedStatus(Enum):
    """Display status derived from a cell's fields."""

    OPENED = auto()
    EXPLODED = auto()
    FLAGGED = auto()
    NOT_FLAGGED = auto()


class CellOpenResult(Enum):
    """Outcome of trying to open a cell."""

    SUCCESS = auto()
    EXPLODED = auto()
    ALREADY_OPENED = auto()


class CellFlagResult(Enum):
    """Outcome of trying to toggle a flag."""

    SUCCESS = auto()
    ALREADY_OPENED = auto()


# ============================================================================
# Cell Class
# ============================================================================

class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    The mine is fixed at construction. Open and flag state change only
    through try_open() and toggle_flag().
    """

    def __init__(self, has_mine: bool = False) -> None:
        self._has_mine = has_mine
        self._is_open = False
        self._is_flagged = False

    def __repr__(self) -> str:
        return (
            f"Cell(has_mine={self._has_mine}, is_open={self._is_open}, "
            f"is_flagged={self._is_flagged})"
        )

    @property
    def has_mine(self) -> bool:
        """Check if cell holds a mine."""
        return self._has_mine

    @property
    def is_open(self) -> bool:
        """Check if cell has been opened."""
        return self._is_open

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self._is_flagged

    def try_open(self) -> CellOpenResult:
        """
        Open this cell.

        Opening is irreversible and clears any flag on the cell.

        Returns:
            ALREADY_OPENED if the cell was open (nothing changes),
            EXPLODED if it holds a mine, SUCCESS otherwise.
        """
        if self._is_open:
            return CellOpenResult.ALREADY_OPENED
        self._is_open = True
        self._is_flagged = False
        if self._has_mine:
            return CellOpenResult.EXPLODED
        return CellOpenResult.SUCCESS

    def toggle_flag(self) -> CellFlagResult:
        """
        Toggle flag on this cell.

        Returns:
            ALREADY_OPENED if the cell is open (nothing changes),
            SUCCESS otherwise.
        """
        if self._is_open:
            return CellFlagResult.ALREADY_OPENED
        self._is_flagged = not self._is_flagged
        return CellFlagResult.SUCCESS

    def status(self) -> CalculatedStatus:
        """
        Derive the display status.

        Raises:
            InternalInvariantError: If the cell is both open and flagged.
        """
        if self._is_open and self._is_flagged:
            raise InternalInvariantError(
                f"cell is both opened and flagged: {self!r}"
            )
        if self._is_open:
            if self._has_mine:
                return CalculatedStatus.EXPLODED
            return CalculatedStatus.OPENED
        if self._is_flagged:
            return CalculatedStatus.FLAGGED
        return CalculatedStatus.NOT_FLAGGED
