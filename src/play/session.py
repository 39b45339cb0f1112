"""
Turn controller for the console game.

A Session reads one command at a time, applies it to the board, and
renders the outcome through an injected presenter until the game
reaches a terminal status.
"""
import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Optional

from game import Board, CellFlagResult, CellOpenResult

from .commands import Command, CommandKind, Position, parse_command, parse_position

if TYPE_CHECKING:
    from .presenter import ConsolePresenter

ReadLine = Callable[[], Optional[str]]


class SessionStatus(Enum):
    """Possible states of a session."""

    PLAYING = auto()
    CLEARED = auto()
    EXPLODED = auto()
    GIVEN_UP = auto()
    FORCE_SHUTDOWN = auto()


class _InputClosed(Exception):
    """Raised internally when read_line reports end of input."""


class Session:
    """
    One game from the first prompt to the final result.

    Args:
        board: Board to play on.
        presenter: Receives every piece of output.
        read_line: Returns the next line of input, or None at end of input.
        logger: Logger for diagnostics.
        player_name: Name used in the greeting.
    """

    def __init__(
        self,
        board: Board,
        presenter: "ConsolePresenter",
        read_line: ReadLine,
        logger: Optional[logging.Logger] = None,
        player_name: str = "anonymous",
    ) -> None:
        self.board = board
        self.presenter = presenter
        self.read_line = read_line
        self.logger = logger or logging.getLogger(__name__)
        self.player_name = player_name
        self._status = SessionStatus.PLAYING
        self._turns = 0

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def turns(self) -> int:
        """Number of open/flag commands that changed the board."""
        return self._turns

    @property
    def is_playing(self) -> bool:
        return self._status == SessionStatus.PLAYING

    # ========================================================================
    # Main Loop
    # ========================================================================

    def start(self) -> SessionStatus:
        """
        Run the game until it reaches a terminal status.

        KeyboardInterrupt while waiting for input and end of input both
        end the game with FORCE_SHUTDOWN.

        Returns:
            The terminal status.
        """
        self.presenter.welcome(self.player_name)
        while self.is_playing:
            self.presenter.prompt()
            try:
                line = self._read()
            except (KeyboardInterrupt, _InputClosed):
                self.interrupt()
                break
            self.execute(parse_command(line))
        return self._status

    def interrupt(self) -> None:
        """Stop a playing session with FORCE_SHUTDOWN."""
        if self.is_playing:
            self._finish(SessionStatus.FORCE_SHUTDOWN)

    def execute(self, command: Command) -> None:
        """
        Apply one parsed command.

        Commands given after the game has ended are ignored.
        """
        if not self.is_playing:
            self.logger.debug("Ignoring %s after game end", command.kind.name)
            return

        self.logger.debug("Executing %s at %s", command.kind.name, command.position)

        if command.kind == CommandKind.OPEN:
            self._open(command.position)
        elif command.kind == CommandKind.FLAG:
            self._flag(command.position)
        elif command.kind == CommandKind.SHOWMAP:
            self._show_map()
        elif command.kind == CommandKind.HELP:
            self.presenter.show_help()
        elif command.kind == CommandKind.GIVEUP:
            self._finish(SessionStatus.GIVEN_UP)
        else:
            self.presenter.warn("Your input is invalid. Type help(h) to see the commands.")

    # ========================================================================
    # Commands
    # ========================================================================

    def _open(self, position: Optional[Position]) -> None:
        try:
            row, col = self._resolve_position(
                position, "> Which cell do you open? Input row and column, 0-indexed. ex: 1 2"
            )
        except (KeyboardInterrupt, _InputClosed):
            self.interrupt()
            return

        result = self.board.try_open(row, col)
        if result == CellOpenResult.ALREADY_OPENED:
            self.presenter.warn(f"The cell ({row}, {col}) has already been opened.")
            self._show_map()
            return

        self._turns += 1
        if result == CellOpenResult.EXPLODED:
            self._finish(SessionStatus.EXPLODED)
            return

        self.presenter.message(f"Opened ({row}, {col}) successfully!")
        self._show_map()
        self._end_turn()

    def _flag(self, position: Optional[Position]) -> None:
        try:
            row, col = self._resolve_position(
                position, "> Which cell do you flag/unflag? Input row and column, 0-indexed. ex: 1 2"
            )
        except (KeyboardInterrupt, _InputClosed):
            self.interrupt()
            return

        result = self.board.try_flag(row, col)
        if result == CellFlagResult.ALREADY_OPENED:
            self.presenter.warn(
                f"The cell ({row}, {col}) has already been opened, so it cannot be flagged."
            )
            self._show_map()
            return

        self._turns += 1
        self.presenter.message(f"Toggled flag on the cell ({row}, {col}).")
        self._show_map()
        self._end_turn()

    def _show_map(self) -> None:
        self.presenter.show_map(self.board.info(), self._turns)

    def _end_turn(self) -> None:
        if self.board.cleared():
            self._finish(SessionStatus.CLEARED)

    def _finish(self, status: SessionStatus) -> None:
        self._status = status
        self.logger.info("Game finished with %s after %d turns", status.name, self._turns)
        self.presenter.show_result(status, self._turns, self.board.info())

    # ========================================================================
    # Input
    # ========================================================================

    def _read(self) -> str:
        line = self.read_line()
        if line is None:
            raise _InputClosed()
        return line

    def _resolve_position(self, position: Optional[Position], question: str) -> Position:
        """Return an in-range position, asking the player until one is given."""
        size = self.board.size
        if position is not None and self._in_range(position):
            return position
        if position is not None:
            self.presenter.warn(
                f"The position {position} is not on the map. "
                f"Rows and columns run from 0 to {size - 1}."
            )

        self.presenter.prompt(question)
        while True:
            answer = self._read()
            parsed = parse_position(answer)
            if parsed is None:
                self.presenter.warn(
                    f"Your position ({answer.strip()}) doesn't match the expected pattern \"row col\"."
                )
            elif not self._in_range(parsed):
                self.presenter.warn(
                    f"The position {parsed} is not on the map. "
                    f"Rows and columns run from 0 to {size - 1}."
                )
            else:
                return parsed
            self.presenter.prompt("> Input the position of the cell again, please.")

    def _in_range(self, position: Position) -> bool:
        row, col = position
        return 0 <= row < self.board.size and 0 <= col < self.board.size
