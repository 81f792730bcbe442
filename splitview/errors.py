"""Exception types raised inside splitview.

All of them are recovered locally; none is meant to reach the terminal.
"""

from __future__ import annotations


class SplitViewError(Exception):
    """Base class for splitview errors."""


class TokenizeError(SplitViewError):
    """No rule of the active lexer state matches at ``offset``."""

    def __init__(self, offset: int, state: str) -> None:
        super().__init__(f"no rule in state {state!r} matches at offset {offset}")
        self.offset = offset
        self.state = state


class FeedError(SplitViewError):
    """A feed message could not be decoded into rows."""
