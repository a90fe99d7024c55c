"""
Fair Dice - Command Line Entrypoint

Usage:
    fair-dice 2,2,4,4,9,9 1,1,6,6,8,8 3,3,5,5,7,7
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from typing import Sequence

import pydantic

from src.config import Settings, configure_logging, get_settings
from src.engine.base import Dice
from src.engine.errors import ConfigurationError
from src.engine.game import GameEngine, GameState, RandomSource, SecureRandomSource
from src.engine.validators import parse_dice_options
from src.cli.render import INPUT_PROMPT, WELCOME, render_event, render_prompt
from src.cli.session import ConsoleSession

logger = logging.getLogger(__name__)

USAGE_EXAMPLE = "fair-dice 2,2,4,4,9,9 1,1,6,6,8,8 3,3,5,5,7,7"

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_INTERNAL_ERROR = 2

NEGATIVE_FACE = re.compile(r"^-\d")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fair-dice",
        description="Provably fair non-transitive dice game.",
        usage="%(prog)s [--log-level LEVEL] FACES FACES FACES [FACES ...]",
        epilog=f"FACES is a comma-separated list of integers. Example: {USAGE_EXAMPLE}",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="override FAIR_DICE_LOG_LEVEL (DEBUG, INFO, WARNING, ...)",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """
    Parse options and collect dice tokens in their original order.

    Dice tokens are left to parse_dice_options, so a token with a leading
    negative face such as "-1,2,3" is a dice, not an option.
    """
    parser = build_parser()
    args, extras = parser.parse_known_args(argv)
    dice = [token for token in extras if token != "--"]
    unknown = [t for t in dice if t.startswith("-") and not NEGATIVE_FACE.match(t)]
    if unknown:
        parser.error(f"unrecognized arguments: {' '.join(unknown)}")
    args.dice = dice
    return args


def play(
    dice: Sequence[Dice],
    session: ConsoleSession,
    settings: Settings,
    source: RandomSource | None = None,
) -> GameState:
    """
    Run one game to completion on a session.

    This loop is the only place that blocks on input. End of input is
    treated as an exit request.

    Returns:
        The terminal GameState (RESOLVED or EXITED)
    """
    source = source or SecureRandomSource(key_bytes=settings.key_bytes)
    precision = settings.probability_precision
    table_format = settings.table_format

    session.write(WELCOME)
    state, events = GameEngine.start(dice, source)
    for payload in events:
        session.write(render_event(payload, precision, table_format))

    while not state.is_finished:
        session.write(render_prompt(state))
        line = session.read_line(INPUT_PROMPT)
        if line is None:
            line = "x"
        state, events = GameEngine.advance(state, line, source)
        for payload in events:
            session.write(render_event(payload, precision, table_format))

    return state


def _config_error(message: str) -> int:
    print(f"{message}\nExample: {USAGE_EXAMPLE}", file=sys.stderr)
    return EXIT_CONFIG_ERROR


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, validate dice, and play one game."""
    args = parse_args(argv)

    try:
        settings = Settings(log_level=args.log_level) if args.log_level else get_settings()
    except pydantic.ValidationError as exc:
        return _config_error(f"Invalid settings: {exc}")

    configure_logging(settings.effective_log_level)

    try:
        dice = parse_dice_options(args.dice, min_count=settings.min_dice)
    except ConfigurationError as exc:
        logger.debug("Rejected dice specification %r", args.dice)
        return _config_error(str(exc))

    logger.info("Starting game with %d dice", len(dice))
    try:
        with ConsoleSession() as session:
            state = play(dice, session, settings)
    except KeyboardInterrupt:
        print("\nExiting...")
        return EXIT_OK
    except Exception:
        logger.exception("Game aborted")
        return EXIT_INTERNAL_ERROR

    logger.info("Game finished in phase %s", state.phase.name)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
