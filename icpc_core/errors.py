"""Error taxonomy for the scoreboard core.

Every error rejects a single command; none of them leave the contest in a
partially updated state.
"""
from __future__ import annotations


class ContestError(Exception):
    """Base class for recoverable scoreboard errors."""


class PreconditionViolation(ContestError):
    """A command was issued in a state that does not allow it."""

    def __init__(self, kind: str, message: str | None = None):
        self.kind = kind
        self.message = message or kind
        super().__init__(self.message)


class CommandParseError(ContestError, ValueError):
    """A command line or payload could not be decoded."""
