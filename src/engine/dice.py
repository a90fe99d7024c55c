"""
Fair Dice - Dice Model

Pairwise face comparisons between two dice. Probabilities are exact
Fractions so that win(a, b) + win(b, a) + tie(a, b) == 1 holds exactly.
"""

from fractions import Fraction

from src.engine.base import Dice


def wins(a: Dice, b: Dice) -> int:
    """Count face pairs (x from a, y from b) with x > y."""
    return sum(1 for x in a.faces for y in b.faces if x > y)


def ties(a: Dice, b: Dice) -> int:
    """Count face pairs with x == y."""
    return sum(1 for x in a.faces for y in b.faces if x == y)


def total_outcomes(a: Dice, b: Dice) -> int:
    return a.face_count * b.face_count


def win_probability(a: Dice, b: Dice) -> Fraction:
    """
    Probability that a throw of a beats a throw of b.

    Ties count toward the denominator only.
    """
    return Fraction(wins(a, b), total_outcomes(a, b))


def tie_probability(a: Dice, b: Dice) -> Fraction:
    """Probability that both throws show the same value."""
    return Fraction(ties(a, b), total_outcomes(a, b))


def beats(a: Dice, b: Dice) -> bool:
    """True if a is more likely to win against b than to lose."""
    return win_probability(a, b) > win_probability(b, a)
