"""
Board module for Minesweeper game.

Implements the size x size grid with random mine placement, cell
opening with a breadth-first cascade, flag toggling, and the win
condition.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Sequence, Tuple

import numpy as np

from .cell import CalculatedStatus, Cell, CellFlagResult, CellOpenResult
from .errors import IndexOutOfBoundsError, InvalidConfigurationError

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MIN_SIZE = 1
MAX_SIZE = 100

# Count reported by info() for cells that are not open
HIDDEN_COUNT = -1

DETERMINISTIC_SEED = 0

CellInfo = Tuple[CalculatedStatus, int]


@dataclass
class GameSetting:
    """
    Configuration for a game.

    Attributes:
        size: Number of rows and columns.
        density: Probability that any one cell holds a mine.
        player_name: Name shown to the player.
        deterministic: Use a fixed seed so every game gets the same map.
    """

    size: int = 10
    density: float = 0.3
    player_name: str = "anonymous"
    deterministic: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if not MIN_SIZE <= self.size <= MAX_SIZE:
            raise InvalidConfigurationError(
                f"Board size must be between {MIN_SIZE} and {MAX_SIZE}, "
                f"got {self.size}"
            )
        if not 0.0 < self.density <= 1.0:
            raise InvalidConfigurationError(
                f"Mine density must be in (0, 1], got {self.density}",
                hint="A density of 0 would leave the board without mines.",
            )


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Owns the grid of cells. The board always holds at least one mine and
    its grid is exactly size x size.
    """

    setting: GameSetting = field(default_factory=GameSetting)
    rng: Optional[np.random.Generator] = field(default=None, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Generate the grid after dataclass creation."""
        if self.rng is None:
            seed = DETERMINISTIC_SEED if self.setting.deterministic else None
            self.rng = np.random.default_rng(seed)
        if not self._grid:
            self._grid = self._generate_grid()

    @classmethod
    def from_layout(cls, mines: Sequence[Sequence[bool]]) -> "Board":
        """
        Build a board with mines at fixed positions.

        Args:
            mines: Square layout, truthy where a cell holds a mine.

        Raises:
            InvalidConfigurationError: If the layout is not square or has
                no mines.
        """
        size = len(mines)
        if size == 0 or any(len(row) != size for row in mines):
            raise InvalidConfigurationError("Board layout must be square")
        mine_total = sum(1 for row in mines for has_mine in row if has_mine)
        if mine_total == 0:
            raise InvalidConfigurationError("Board layout has no mines")

        setting = GameSetting(size=size, density=mine_total / (size * size))
        grid = [[Cell(has_mine=bool(has_mine)) for has_mine in row] for row in mines]
        return cls(setting=setting, _grid=grid)

    # ========================================================================
    # Grid Generation (Low-level)
    # ========================================================================

    def _generate_grid(self) -> List[List[Cell]]:
        """Draw mine masks until one holds at least one mine."""
        size = self.setting.size
        attempts = 1
        mask = self._draw_mine_mask()
        while not mask.any():
            attempts += 1
            mask = self._draw_mine_mask()
        logger.debug(
            "Generated %dx%d board with %d mines after %d attempt(s)",
            size, size, int(mask.sum()), attempts,
        )
        return [
            [Cell(has_mine=bool(mask[row, col])) for col in range(size)]
            for row in range(size)
        ]

    def _draw_mine_mask(self) -> np.ndarray:
        """Decide independently for each cell whether it holds a mine."""
        size = self.setting.size
        return self.rng.random((size, size)) < self.setting.density

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the up to 8 in-range neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.size and 0 <= col < self.size

    def _check_position(self, row: int, col: int) -> None:
        """Raise IndexOutOfBoundsError for positions outside the board."""
        if not self._is_valid_position(row, col):
            raise IndexOutOfBoundsError(
                f"Position ({row}, {col}) is outside the "
                f"{self.size}x{self.size} board"
            )

    def adjacent_mine_count(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        self._check_position(row, col)
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].has_mine:
                count += 1
        return count

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def try_open(self, row: int, col: int) -> CellOpenResult:
        """
        Open the cell at the given position.

        If the cell opens safely and has no adjacent mines, its
        neighbors are opened as well, spreading through the whole
        connected region of zero-count cells.

        Args:
            row: Row index to open.
            col: Column index to open.

        Returns:
            Result of opening the target cell.

        Raises:
            IndexOutOfBoundsError: If the position is outside the board.
        """
        self._check_position(row, col)
        result = self._grid[row][col].try_open()
        if result == CellOpenResult.SUCCESS:
            self._open_neighbors(row, col)
        return result

    def _open_neighbors(self, row: int, col: int) -> None:
        """Breadth-first cascade from an opened cell."""
        queue: Deque[Tuple[int, int]] = deque([(row, col)])
        opened = 0
        while queue:
            current_row, current_col = queue.popleft()
            if self.adjacent_mine_count(current_row, current_col) > 0:
                continue
            for neighbor_row, neighbor_col in self._get_neighbors(
                current_row, current_col
            ):
                neighbor = self._grid[neighbor_row][neighbor_col]
                if neighbor.is_open:
                    continue
                # No mines around the current cell, so this never explodes
                neighbor.try_open()
                opened += 1
                queue.append((neighbor_row, neighbor_col))
        if opened:
            logger.debug("Cascade from (%d, %d) opened %d cells", row, col, opened)

    def try_flag(self, row: int, col: int) -> CellFlagResult:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Raises:
            IndexOutOfBoundsError: If the position is outside the board.
        """
        self._check_position(row, col)
        return self._grid[row][col].toggle_flag()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def size(self) -> int:
        """Number of rows (and columns)."""
        return self.setting.size

    @property
    def mine_count(self) -> int:
        """Total mines on the board."""
        return sum(1 for row in self._grid for cell in row if cell.has_mine)

    def get_cell(self, row: int, col: int) -> Cell:
        """Get cell at position."""
        self._check_position(row, col)
        return self._grid[row][col]

    def cleared(self) -> bool:
        """Check if every mined cell is flagged."""
        return all(
            cell.is_flagged
            for row in self._grid
            for cell in row
            if cell.has_mine
        )

    def info(self) -> List[List[CellInfo]]:
        """
        Describe every cell for rendering.

        Returns:
            Grid of (status, count) pairs. count is the adjacent mine
            count for open cells and HIDDEN_COUNT for the rest.
        """
        return [
            [
                (
                    cell.status(),
                    self.adjacent_mine_count(row, col)
                    if cell.is_open else HIDDEN_COUNT,
                )
                for col, cell in enumerate(cells)
            ]
            for row, cells in enumerate(self._grid)
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for agents.

        Returns:
            2D numpy array where:
                -1 = not open
                -2 = flagged
                0-8 = opened with adjacent count
                9 = exploded mine
        """
        obs = np.full((self.size, self.size), -1, dtype=np.int8)
        for row, cells in enumerate(self.info()):
            for col, (status, count) in enumerate(cells):
                if status == CalculatedStatus.FLAGGED:
                    obs[row, col] = -2
                elif status == CalculatedStatus.EXPLODED:
                    obs[row, col] = 9
                elif status == CalculatedStatus.OPENED:
                    obs[row, col] = count
        return obs

    def closed_positions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that are not open yet.

        Returns:
            List of (row, col) positions that can still be opened.
        """
        return [
            (row, col)
            for row in range(self.size)
            for col in range(self.size)
            if not self._grid[row][col].is_open
        ]
