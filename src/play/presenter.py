"""
Console presentation for the game session.

All player-facing output goes through ConsolePresenter, which wraps an
injected Rich console. build_map_view() is a pure transform and holds
no I/O.
"""
from typing import Dict, List, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule

from game import CalculatedStatus
from game.board import CellInfo
from game.errors import InternalInvariantError

from .session import SessionStatus


HELP_TEXT = """\
# Help

## How to win
- When you **flag** every cell that has a mine, you win.
- If you **open** a cell that has a mine before that, it explodes and you lose.

## What you can do
Choose one command every turn:

- `open`, `open row col` (short: `o`)
    - open a cell that is not open yet. If it has a mine, the game ends.
    - without a position you will be asked for one.
- `flag`, `flag row col` (short: `f`)
    - flag or un-flag a cell that is not open yet.
    - without a position you will be asked for one.
- `showmap` (short: `s`)
    - show the current map
- `giveup` (short: `g`)
    - quit the game
- `help` (short: `h`)
    - show this help

Enjoy!
"""

COMMAND_PROMPT = "> Select your command: open(o) / flag(f) / showmap(s) / giveup(g) / help(h)"

_STATUS_SYMBOLS: Dict[CalculatedStatus, str] = {
    CalculatedStatus.FLAGGED: "F",
    CalculatedStatus.NOT_FLAGGED: "-",
    CalculatedStatus.EXPLODED: "*",
}

_FINISH_MESSAGES: Dict[SessionStatus, str] = {
    SessionStatus.CLEARED: "Congratulations! You win!",
    SessionStatus.EXPLODED: "Unfortunately, a mine has exploded... Please try again soon!",
    SessionStatus.GIVEN_UP: "You gave up? Ok, please try again soon!",
    SessionStatus.FORCE_SHUTDOWN: "Force shutdown...",
}


def _cell_symbol(status: CalculatedStatus, count: int) -> str:
    if status == CalculatedStatus.OPENED:
        return " " if count == 0 else str(count)
    return _STATUS_SYMBOLS[status]


def build_map_view(info: List[List[CellInfo]]) -> str:
    """
    Render board info as a fixed-width text grid.

    Column indices head the grid, row indices run down the left edge.
    """
    size = len(info)
    header = "     " + "".join(str(col).rjust(4) for col in range(size))
    rule = "     " + "----" * size
    body = [
        str(row).rjust(3) + " | " + " ".join(
            _cell_symbol(status, count).rjust(3) for status, count in cells
        )
        for row, cells in enumerate(info)
    ]
    return "\n".join([header, rule] + body)


class ConsolePresenter:
    """Renders session output to a Rich console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def welcome(self, player_name: str) -> None:
        self.console.print(
            Panel.fit(
                f"Let's start minesweeper on your console, {escape(player_name)}!\n"
                "Give flags to all the cells that have mines.",
                title="Minesweeper",
            ),
        )

    def prompt(self, text: str = COMMAND_PROMPT) -> None:
        self.console.print(text, style="bold", markup=False, highlight=False)

    def message(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False)

    def warn(self, text: str) -> None:
        self.console.print(text, style="yellow", markup=False, highlight=False)

    def show_map(self, info: List[List[CellInfo]], turns: int) -> None:
        self.console.print(f"current turn is: {turns}", markup=False)
        self.console.print("current map is:", markup=False)
        self.console.print(build_map_view(info), markup=False, highlight=False)

    def show_help(self) -> None:
        self.console.print(Markdown(HELP_TEXT))

    def show_result(
        self, status: SessionStatus, turns: int, info: List[List[CellInfo]]
    ) -> None:
        """
        Print the closing message and the final result view.

        Raises:
            InternalInvariantError: If the session is still playing.
        """
        if status not in _FINISH_MESSAGES:
            raise InternalInvariantError(
                f"session finished with status {status.name}"
            )
        self.console.print(_FINISH_MESSAGES[status], style="bold", markup=False)
        self.console.print(Rule("final result"))
        self.console.print("map:", markup=False)
        self.console.print(build_map_view(info), markup=False, highlight=False)
        self.console.print(f"result: {status.name}", markup=False)
        self.console.print(f"turns: {turns}", markup=False)
        self.console.print(Rule())
        self.console.print("Thank you for playing!", markup=False)
