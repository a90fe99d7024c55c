"""
Fair Dice Game Engine.

Pure Python game logic with zero terminal dependencies.
Handles commitments, dice comparison, probability tables and turn sequencing.
"""

from src.engine.base import (
    Dice,
    Outcome,
    Party,
    Phase,
    Throw,
)
from src.engine.commitment import Commitment, combine, generate_commitment, verify
from src.engine.errors import (
    ConfigurationError,
    FairDiceError,
    ProtocolError,
    ValidationError,
)
from src.engine.events import EventPayload, GameEvent
from src.engine.game import GameEngine, GameState, SecureRandomSource
from src.engine.probability import probability_table

__all__ = [
    # Data Classes
    "Commitment",
    "Dice",
    "EventPayload",
    "GameState",
    "Throw",
    # Enums
    "GameEvent",
    "Outcome",
    "Party",
    "Phase",
    # Errors
    "ConfigurationError",
    "FairDiceError",
    "ProtocolError",
    "ValidationError",
    # Engine
    "GameEngine",
    "SecureRandomSource",
    "combine",
    "generate_commitment",
    "probability_table",
    "verify",
]
