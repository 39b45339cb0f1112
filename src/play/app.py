"""
CLI entry point for the console Minesweeper game.

This module is the only error boundary of the application. It parses
arguments, configures logging, builds the board and session, and maps
the outcome (or any escaping error) to a process exit code.
"""
import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from game import Board, GameSetting
from game.errors import InternalInvariantError, MinesweeperError

from . import __version__, exit_codes
from .presenter import ConsolePresenter
from .session import ReadLine, Session, SessionStatus


# ============================================================================
# Argument Parser
# ============================================================================

def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser."""
    parser = argparse.ArgumentParser(
        prog="minesweeper",
        description="Play minesweeper on your console.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-s", "--size", type=int, default=10,
        help="size of the map (default: 10)",
    )
    parser.add_argument(
        "-d", "--density", type=float, default=0.3,
        help="density of mines, in (0, 1] (default: 0.3)",
    )
    parser.add_argument(
        "-n", "--player-name", default="anonymous",
        help="your player name",
    )
    parser.add_argument(
        "--deterministic", action="store_true",
        help="use a fixed map for debugging",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="show debug logs",
    )
    return parser


# ============================================================================
# Setup Helpers
# ============================================================================

def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _console_read_line(console: Console) -> ReadLine:
    def read_line() -> Optional[str]:
        try:
            return console.input()
        except EOFError:
            return None

    return read_line


# ============================================================================
# Main Entry Point
# ============================================================================

def main(
    argv: Optional[List[str]] = None,
    console: Optional[Console] = None,
    read_line: Optional[ReadLine] = None,
) -> int:
    """
    Run one game.

    Args:
        argv: Explicit argument list. When None, sys.argv[1:] is used.
        console: Console for game output (default: a stdout console).
        read_line: Input source (default: lines read from the console).

    Returns:
        Process exit code.
    """
    args = _build_parser().parse_args(argv)
    configure_logging(args.verbose)

    setting = GameSetting(
        size=args.size,
        density=args.density,
        player_name=args.player_name,
        deterministic=args.deterministic,
    )
    console = console or Console()
    session = Session(
        board=Board(setting),
        presenter=ConsolePresenter(console),
        read_line=read_line or _console_read_line(console),
        logger=logging.getLogger("play.session"),
        player_name=setting.player_name,
    )

    status = session.start()
    if status == SessionStatus.FORCE_SHUTDOWN:
        return exit_codes.KEYBOARD_INTERRUPT
    return exit_codes.SUCCESS


def cli(argv: Optional[List[str]] = None) -> None:
    """
    Top-level error boundary invoked by the console-script entry point.

    Wraps main() so the process never exits with a raw stack trace
    during normal usage.
    """
    err_console = Console(stderr=True)
    try:
        code = main(argv)
        sys.exit(code)
    except InternalInvariantError as exc:
        err_console.print(f"[bold red]Internal error.[/bold red] {escape(str(exc))}", highlight=False)
        if exc.hint:
            err_console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}", highlight=False)
        sys.exit(exit_codes.UNEXPECTED_ERROR)
    except MinesweeperError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", highlight=False)
        if exc.hint:
            err_console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}", highlight=False)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        err_console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}",
            highlight=False,
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
