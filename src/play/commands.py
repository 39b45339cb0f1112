"""
Command parsing for the console game.

A line is split on whitespace: the first token names the command, and
an optional pair of non-negative integers gives the target cell.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

Position = Tuple[int, int]


class CommandKind(Enum):
    """Commands the player can give."""

    OPEN = auto()
    FLAG = auto()
    SHOWMAP = auto()
    GIVEUP = auto()
    HELP = auto()
    INVALID = auto()


_ALIASES: Dict[str, CommandKind] = {
    "open": CommandKind.OPEN,
    "o": CommandKind.OPEN,
    "flag": CommandKind.FLAG,
    "f": CommandKind.FLAG,
    "showmap": CommandKind.SHOWMAP,
    "s": CommandKind.SHOWMAP,
    "giveup": CommandKind.GIVEUP,
    "g": CommandKind.GIVEUP,
    "help": CommandKind.HELP,
    "h": CommandKind.HELP,
}


@dataclass(frozen=True)
class Command:
    """A parsed command and its optional (row, col) target."""

    kind: CommandKind
    position: Optional[Position] = None


INVALID = Command(CommandKind.INVALID)


def _parse_index(token: str) -> Optional[int]:
    if token.isascii() and token.isdigit():
        return int(token)
    return None


def _parse_pair(tokens: List[str]) -> Optional[Position]:
    if len(tokens) != 2:
        return None
    row = _parse_index(tokens[0])
    col = _parse_index(tokens[1])
    if row is None or col is None:
        return None
    return row, col


def parse_command(line: str) -> Command:
    """
    Parse one line of player input.

    Args:
        line: Raw input such as "open", "o 1 2" or "FLAG 0 3".

    Returns:
        The parsed command, or INVALID when the name is unknown or the
        position is malformed.
    """
    tokens = line.split()
    if not tokens:
        return INVALID

    kind = _ALIASES.get(tokens[0].lower())
    if kind is None:
        return INVALID

    if len(tokens) == 1:
        return Command(kind)

    position = _parse_pair(tokens[1:])
    if position is None:
        return INVALID
    return Command(kind, position)


def parse_position(line: str) -> Optional[Position]:
    """Parse a "row col" answer to a position prompt."""
    return _parse_pair(line.split())
