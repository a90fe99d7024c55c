"""
Fair Dice Terminal Front End.

Argument parsing, prompt rendering and the interactive driver loop.
"""

from src.cli.app import main, play
from src.cli.session import ConsoleSession

__all__ = ["ConsoleSession", "main", "play"]
