"""
Fair Dice - Probability Engine

Win-probability matrix over a set of dice, for the help display.
"""

from fractions import Fraction
from typing import Sequence

from src.engine.base import Dice
from src.engine.dice import win_probability

ProbabilityTable = tuple[tuple[Fraction, ...], ...]


def probability_table(dice: Sequence[Dice]) -> ProbabilityTable:
    """
    Build the square matrix of win probabilities.

    Entry [i][j] is the probability that dice[i] beats dice[j]. Diagonal
    entries compare a dice with itself and are only there for display.
    The table is recomputed on every call.

    Args:
        dice: Dice options in display order

    Returns:
        Tuple of rows, one per dice
    """
    return tuple(
        tuple(win_probability(row_dice, col_dice) for col_dice in dice)
        for row_dice in dice
    )


def format_probability(probability: Fraction, precision: int = 4) -> str:
    """Render a probability as a fixed-point string, e.g. '0.5556'."""
    return f"{float(probability):.{precision}f}"
