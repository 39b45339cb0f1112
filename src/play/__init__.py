"""
Console play module.

Provides the turn-based session, command parsing and console output
for playing Minesweeper in a terminal.
"""
from .commands import Command, CommandKind, parse_command, parse_position
from .session import Session, SessionStatus
from .presenter import ConsolePresenter, build_map_view

__version__ = "1.0.0"

__all__ = [
    "Command",
    "CommandKind",
    "parse_command",
    "parse_position",
    "Session",
    "SessionStatus",
    "ConsolePresenter",
    "build_map_view",
    "__version__",
]
