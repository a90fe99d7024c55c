"""
Fair Dice - Input Validation Utilities

Provides validation functions for startup dice specifications and
interactive selections. All validators either return validated data or
raise a descriptive ConfigurationError / ValidationError.
"""

from typing import Sequence

from src.engine.base import Dice
from src.engine.errors import ConfigurationError, ValidationError

MIN_DICE_OPTIONS = 3
EXIT_TOKENS = frozenset({"x", "X"})
HELP_TOKEN = "?"


def parse_dice_token(token: str, position: int = 1) -> Dice:
    """
    Parse one comma-separated dice specification such as "2,2,4,4,9,9".

    Args:
        token: Raw command-line token
        position: 1-based position of the token, used in messages

    Returns:
        Validated Dice

    Raises:
        ConfigurationError: If the list is empty or holds a non-integer
    """
    elements = [element.strip() for element in token.split(",")]
    if not token.strip() or all(not element for element in elements):
        raise ConfigurationError(
            f"Dice {position} has no sides. Each dice must have at least one value."
        )

    faces = []
    for element in elements:
        try:
            faces.append(int(element))
        except ValueError:
            raise ConfigurationError(
                f"Dice {position} contains a non-integer value {element!r}. "
                "Ensure all dice values are integers."
            ) from None
    return Dice.from_sequence(faces)


def parse_dice_options(
    tokens: Sequence[str],
    min_count: int = MIN_DICE_OPTIONS,
) -> tuple[Dice, ...]:
    """
    Validate the full startup specification.

    Args:
        tokens: One token per dice option
        min_count: Minimum number of dice options required

    Returns:
        Tuple of independently constructed Dice in argument order

    Raises:
        ConfigurationError: If fewer than min_count tokens are given or any
            token is malformed
    """
    if len(tokens) < min_count:
        raise ConfigurationError(
            f"You must provide at least {min_count} dice configurations to play the game, "
            f"got {len(tokens)}."
        )
    return tuple(parse_dice_token(token, i) for i, token in enumerate(tokens, start=1))


def parse_selection(token: str, upper: int) -> int:
    """
    Validate a numeric interactive selection in [0, upper).

    Args:
        token: Raw input line
        upper: Exclusive upper bound of the selection

    Returns:
        Selected integer

    Raises:
        ValidationError: If the token is not an integer or is out of range
    """
    text = token.strip()
    if not (text.isascii() and text.isdigit()):
        raise ValidationError(f"Invalid selection {text!r}: not a number.")
    value = int(text)

    if not (0 <= value < upper):
        raise ValidationError(
            f"Invalid selection {value}: must be between 0 and {upper - 1}."
        )
    return value


def is_exit_token(token: str) -> bool:
    return token.strip() in EXIT_TOKENS


def is_help_token(token: str) -> bool:
    return token.strip() == HELP_TOKEN
