"""
Fair Dice - Game Event Definitions

Effects emitted by the state machine. The engine never prints; the
front end renders these payloads in order.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from src.engine.base import Party


class GameEvent(Enum):
    """Events that can occur during a game."""

    COMMITMENT_PUBLISHED = auto()
    COMMITMENT_REVEALED = auto()
    FIRST_MOVE_DECIDED = auto()
    DICE_CLAIMED = auto()
    THROW_RESOLVED = auto()
    GAME_RESOLVED = auto()
    INPUT_REJECTED = auto()
    HELP_SHOWN = auto()
    SESSION_EXITED = auto()


@dataclass(frozen=True)
class EventPayload:
    """Wrapper for event data."""

    event: GameEvent
    party: Party | None = None
    data: dict[str, Any] = field(default_factory=dict)
