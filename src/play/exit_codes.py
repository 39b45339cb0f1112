"""
Exit-code constants used by the CLI layer.
"""

SUCCESS = 0
"""Game finished normally (won, lost or given up)."""

GENERAL_ERROR = 1
"""A known MinesweeperError was caught, e.g. an invalid configuration."""

UNEXPECTED_ERROR = 2
"""An internal invariant failed or an unhandled exception escaped."""

KEYBOARD_INTERRUPT = 130
"""Game was interrupted. Follows POSIX convention (128 + SIGINT=2)."""
