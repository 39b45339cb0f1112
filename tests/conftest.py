"""
Pytest configuration and shared fixtures.
"""
import io
import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from rich.console import Console

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from game import Board, Cell, GameSetting
from play import ConsolePresenter


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a deterministic 10x10 board."""
    return Board(GameSetting(deterministic=True))


@pytest.fixture
def corner_mine_board() -> Board:
    """Create a 3x3 board with a single mine at (0, 0)."""
    return Board.from_layout([
        [True, False, False],
        [False, False, False],
        [False, False, False],
    ])


@pytest.fixture
def walled_board() -> Board:
    """
    Create a 5x5 board whose middle column is full of mines.

    Opening the left edge cascades through column 0 only.
    """
    return Board.from_layout([
        [False, False, True, False, False],
        [False, False, True, False, False],
        [False, False, True, False, False],
        [False, False, True, False, False],
        [False, False, True, False, False],
    ])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def safe_cell() -> Cell:
    """Create a closed cell without a mine."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(has_mine=True)


# ============================================================================
# Console Fixtures
# ============================================================================

@pytest.fixture
def output() -> io.StringIO:
    """Buffer that receives everything the presenter prints."""
    return io.StringIO()


@pytest.fixture
def presenter(output: io.StringIO) -> ConsolePresenter:
    """Presenter writing plain text into the output buffer."""
    console = Console(file=output, width=200, color_system=None, force_terminal=False)
    return ConsolePresenter(console)


class ScriptedInput:
    """read_line stand-in that replays lines, then reports end of input."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: List[str] = list(lines)

    def __call__(self) -> Optional[str]:
        if not self._lines:
            return None
        return self._lines.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._lines)


@pytest.fixture
def scripted_input():
    """Factory for ScriptedInput objects."""
    return ScriptedInput
