"""
Fair Dice - Logging Configuration

Log records go to stderr so they never interleave with the game prompts
on stdout.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_HANDLER_NAME = "fair_dice"


def configure_logging(level: str = "WARNING") -> None:
    """Install the stderr handler on the `src` logger once and set its level."""
    root = logging.getLogger("src")
    root.setLevel(level)
    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
