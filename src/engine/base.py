"""
Fair Dice - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. All classes are immutable (frozen dataclasses) so a game state
can be passed around and compared without defensive copies.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence

from src.engine.errors import ConfigurationError


class Party(Enum):
    """The two sides of a game."""
    HOST = "host"
    EXTERNAL = "external"

    @property
    def other(self) -> "Party":
        return Party.EXTERNAL if self is Party.HOST else Party.HOST


class Phase(Enum):
    """States of the game state machine."""
    DETERMINE_FIRST_MOVE = auto()
    CLAIM_DICE = auto()
    THROW_HOST = auto()
    THROW_EXTERNAL = auto()
    RESOLVED = auto()
    EXITED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.RESOLVED, Phase.EXITED)


class Outcome(Enum):
    """Result of comparing the two throws."""
    EXTERNAL_WINS = "external_wins"
    HOST_WINS = "host_wins"
    TIE = "tie"


@dataclass(frozen=True, eq=False)
class Dice:
    """
    Immutable dice with an ordered sequence of face values.

    Equality and hashing are by identity: two dice configured with the
    same faces are still distinct members of a pool.

    Attributes:
        faces: Tuple of integer face values (may repeat, need not be sorted)
    """
    faces: tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate the dice has at least one integer face."""
        object.__setattr__(self, "faces", tuple(self.faces))
        if len(self.faces) < 1:
            raise ConfigurationError("A dice must have at least one face.")
        for i, value in enumerate(self.faces):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"Face at index {i} must be an integer, got {type(value).__name__}."
                )

    def __len__(self) -> int:
        return len(self.faces)

    def __getitem__(self, index: int) -> int:
        return self.faces[index]

    def __str__(self) -> str:
        return self.label

    @property
    def face_count(self) -> int:
        """Number of faces, also the modulus of a fair throw."""
        return len(self.faces)

    @property
    def label(self) -> str:
        """Comma-separated signature used in prompts and tables."""
        return ",".join(str(v) for v in self.faces)

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> "Dice":
        """Create a Dice from any sequence type."""
        return cls(faces=tuple(values))


@dataclass(frozen=True)
class Throw:
    """
    One resolved fair throw.

    Attributes:
        party: Owner of the thrown dice
        dice: The dice that was thrown
        secret: Host's revealed secret
        external_input: Number submitted by the external party
        index: (secret + external_input) mod face_count
        value: Face value at that index
    """
    party: Party
    dice: Dice
    secret: int
    external_input: int
    index: int
    value: int

    @property
    def modulus(self) -> int:
        return self.dice.face_count
