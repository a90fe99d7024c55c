"""
Fair Dice - Probability Engine Tests
"""

from fractions import Fraction

from src.engine.base import Dice
from src.engine.dice import win_probability
from src.engine.probability import format_probability, probability_table


class TestProbabilityTable:
    """Tests for probability_table()."""

    def test_square(self, four_dice):
        table = probability_table(four_dice)
        assert len(table) == 4
        assert all(len(row) == 4 for row in table)

    def test_entries_match_win_probability(self, nontransitive_dice):
        table = probability_table(nontransitive_dice)
        for i, a in enumerate(nontransitive_dice):
            for j, b in enumerate(nontransitive_dice):
                assert table[i][j] == win_probability(a, b)

    def test_diagonal_included(self, nontransitive_dice):
        table = probability_table(nontransitive_dice)
        assert table[0][0] == Fraction(1, 3)

    def test_cycle_values(self, nontransitive_dice):
        table = probability_table(nontransitive_dice)
        assert table[0][1] == Fraction(5, 9)
        assert table[1][2] == Fraction(5, 9)
        assert table[2][0] == Fraction(5, 9)
        assert table[1][0] == Fraction(4, 9)

    def test_recomputed_each_call(self, nontransitive_dice):
        first = probability_table(nontransitive_dice)
        second = probability_table(nontransitive_dice)
        assert first == second
        assert first is not second

    def test_empty(self):
        assert probability_table([]) == ()

    def test_identical_faces_still_get_rows(self):
        dice = [Dice(faces=(1, 2)), Dice(faces=(1, 2))]
        assert len(probability_table(dice)) == 2


class TestFormatProbability:
    """Tests for format_probability()."""

    def test_four_places(self):
        assert format_probability(Fraction(5, 9)) == "0.5556"

    def test_custom_precision(self):
        assert format_probability(Fraction(1, 3), precision=2) == "0.33"

    def test_whole_numbers(self):
        assert format_probability(Fraction(0)) == "0.0000"
        assert format_probability(Fraction(1)) == "1.0000"
