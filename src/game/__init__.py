"""
Minesweeper game module.

Provides the core game logic: cells, the board with its cascading
reveal, and a Gymnasium environment over the board.
"""
from .cell import CalculatedStatus, Cell, CellFlagResult, CellOpenResult
from .board import Board, GameSetting, HIDDEN_COUNT
from .errors import (
    IndexOutOfBoundsError,
    InternalInvariantError,
    InvalidConfigurationError,
    MinesweeperError,
)
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CalculatedStatus",
    "CellOpenResult",
    "CellFlagResult",
    "Board",
    "GameSetting",
    "HIDDEN_COUNT",
    "MinesweeperError",
    "InvalidConfigurationError",
    "IndexOutOfBoundsError",
    "InternalInvariantError",
    "MinesweeperEnv",
]
