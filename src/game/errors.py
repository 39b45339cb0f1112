"""
Exception hierarchy for the Minesweeper game.

Every error that crosses a module boundary inherits from
MinesweeperError so the CLI error boundary can render it without a
stack trace.

Hierarchy:
    MinesweeperError
    ├── InvalidConfigurationError
    ├── IndexOutOfBoundsError (also an IndexError)
    └── InternalInvariantError
"""
from typing import Optional


class MinesweeperError(Exception):
    """
    Base exception for all game errors.

    Attributes:
        hint: Optional guidance shown below the error message.
    """

    def __init__(self, message: str, *, hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.hint = hint


class InvalidConfigurationError(MinesweeperError):
    """Raised when size, density or a board layout is out of range."""


class IndexOutOfBoundsError(MinesweeperError, IndexError):
    """Raised when a cell position lies outside the board."""


class InternalInvariantError(MinesweeperError):
    """Raised when the game reaches a state that should be impossible."""

    def __init__(self, message: str) -> None:
        super().__init__(
            f"internal invariant failure: {message}",
            hint="Please report this issue to the game maintainers.",
        )
