#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py [--size N] [--density D] [--player-name NAME] [--deterministic] [-v]
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from play.app import cli  # noqa: E402


if __name__ == "__main__":
    cli()
