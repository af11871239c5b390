"""Messages describing bugs found during model checking."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

__all__ = ["BugMessage"]


class BugMessage:
    """A bug report line."""

    def __init__(self, text: str):
        self.msg = f"  [BUG] {text}\n"

    def print(self, stream: Optional[TextIO] = None) -> None:
        """Write the message to ``stream``, standard output by default."""
        (stream if stream is not None else sys.stdout).write(self.msg)

    def __str__(self) -> str:
        return self.msg

    def __repr__(self) -> str:
        return f"BugMessage({self.msg!r})"