"""
Fair Dice - Console Session

The interactive handle owned by the driver loop. The engine never sees
it; only the driver reads lines and writes rendered text.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

logger = logging.getLogger(__name__)


class ConsoleSession:
    """Line-oriented terminal session used as a context manager.

    Example:
        with ConsoleSession() as session:
            line = session.read_line("Your selection: ")
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._closed = False

    def __enter__(self) -> ConsoleSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def write(self, text: str) -> None:
        """Write one block of text followed by a newline."""
        if self._closed:
            raise RuntimeError("Session is closed.")
        self._stdout.write(text + "\n")
        self._stdout.flush()

    def read_line(self, prompt: str = "") -> str | None:
        """Show a prompt and block for one line. Returns None on end of input."""
        if self._closed:
            raise RuntimeError("Session is closed.")
        self._stdout.write(prompt)
        self._stdout.flush()
        line = self._stdin.readline()
        if line == "":
            logger.debug("End of input reached")
            return None
        return line.rstrip("\r\n")

    def close(self) -> None:
        if not self._closed:
            self._stdout.flush()
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed
