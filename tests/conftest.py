"""
Fair Dice - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import pytest

from src.engine.base import Dice
from src.engine.commitment import Commitment, compute_digest


class ScriptedSource:
    """RandomSource with predetermined secrets and host picks."""

    def __init__(self, secrets=(), picks=()):
        self._secrets = list(secrets)
        self._picks = list(picks)
        self.committed: list[Commitment] = []
        self.pick_counts: list[int] = []

    def commit(self, value_range: int) -> Commitment:
        secret = self._secrets.pop(0)
        key = bytes([len(self.committed) + 1]) * 32
        commitment = Commitment(
            value_range=value_range,
            secret=secret,
            key=key,
            digest=compute_digest(key, secret),
        )
        self.committed.append(commitment)
        return commitment

    def pick(self, count: int) -> int:
        self.pick_counts.append(count)
        return self._picks.pop(0)


# =============================================================================
# DICE FIXTURES
# =============================================================================

@pytest.fixture
def dice_a() -> Dice:
    return Dice(faces=(2, 2, 4, 4, 9, 9))


@pytest.fixture
def dice_b() -> Dice:
    return Dice(faces=(1, 1, 6, 6, 8, 8))


@pytest.fixture
def dice_c() -> Dice:
    return Dice(faces=(3, 3, 5, 5, 7, 7))


@pytest.fixture
def nontransitive_dice(dice_a, dice_b, dice_c) -> tuple[Dice, Dice, Dice]:
    """Classic cycle: A beats B, B beats C, C beats A."""
    return (dice_a, dice_b, dice_c)


@pytest.fixture
def four_dice(nontransitive_dice) -> tuple[Dice, ...]:
    """Three cyclic dice plus a plain d6."""
    return nontransitive_dice + (Dice(faces=(1, 2, 3, 4, 5, 6)),)


# =============================================================================
# RANDOMNESS FIXTURES
# =============================================================================

@pytest.fixture
def scripted_source():
    """Factory for ScriptedSource(secrets=..., picks=...)."""
    return ScriptedSource
