"""
Fair Dice - Dice Model Tests

Pairwise win/tie counts and exact probabilities.
"""

from fractions import Fraction
from itertools import permutations

import pytest

from src.engine.base import Dice
from src.engine.dice import beats, tie_probability, ties, win_probability, wins


class TestWins:
    """Tests for wins() and ties()."""

    def test_a_against_b(self, dice_a, dice_b):
        assert wins(dice_a, dice_b) == 20
        assert wins(dice_b, dice_a) == 16

    def test_no_ties_in_cycle(self, nontransitive_dice):
        for a, b in permutations(nontransitive_dice, 2):
            assert ties(a, b) == 0

    def test_overlapping_faces(self):
        low = Dice(faces=(1, 2, 3))
        high = Dice(faces=(2, 3, 4))
        assert wins(low, high) == 1
        assert wins(high, low) == 6
        assert ties(low, high) == 2

    def test_single_face_dice(self):
        assert wins(Dice(faces=(5,)), Dice(faces=(4,))) == 1
        assert wins(Dice(faces=(4,)), Dice(faces=(5,))) == 0

    def test_unsorted_faces(self):
        assert wins(Dice(faces=(9, 1)), Dice(faces=(5,))) == 1


class TestWinProbability:
    """Tests for win_probability() and tie_probability()."""

    def test_returns_fraction(self, dice_a, dice_b):
        assert isinstance(win_probability(dice_a, dice_b), Fraction)

    def test_a_beats_b_rounded(self, dice_a, dice_b):
        assert win_probability(dice_a, dice_b) == Fraction(5, 9)
        assert round(float(win_probability(dice_a, dice_b)), 4) == 0.5556

    def test_self_comparison(self, dice_a):
        assert win_probability(dice_a, dice_a) == Fraction(12, 36)
        assert tie_probability(dice_a, dice_a) == Fraction(12, 36)

    @pytest.mark.parametrize(
        "faces_a,faces_b",
        [
            ((1, 2, 3), (2, 3, 4)),
            ((1, 1, 1), (1, 1, 1)),
            ((2, 2, 4, 4, 9, 9), (1, 1, 6, 6, 8, 8)),
            ((-3, 0, 7), (0, 0)),
            ((5,), (1, 5, 9, 5)),
        ],
    )
    def test_probabilities_sum_to_one(self, faces_a, faces_b):
        a, b = Dice(faces=faces_a), Dice(faces=faces_b)
        total = win_probability(a, b) + win_probability(b, a) + tie_probability(a, b)
        assert total == 1

    def test_tie_probability_symmetric(self):
        a, b = Dice(faces=(1, 2, 3)), Dice(faces=(2, 3, 4))
        assert tie_probability(a, b) == tie_probability(b, a) == Fraction(2, 9)


class TestNonTransitiveCycle:
    """A beats B, B beats C, C beats A."""

    def test_cycle(self, dice_a, dice_b, dice_c):
        assert beats(dice_a, dice_b)
        assert beats(dice_b, dice_c)
        assert beats(dice_c, dice_a)

    def test_each_beats_exactly_one(self, nontransitive_dice):
        for dice in nontransitive_dice:
            others = [d for d in nontransitive_dice if d is not dice]
            assert sum(beats(dice, other) for other in others) == 1
            assert sum(beats(other, dice) for other in others) == 1

    def test_equal_dice_do_not_beat_each_other(self):
        a, b = Dice(faces=(1, 6)), Dice(faces=(1, 6))
        assert not beats(a, b)
        assert not beats(b, a)
