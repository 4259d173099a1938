"""Errors raised by the output model."""

from __future__ import annotations


class VerdictError(ValueError):
    """Raised when a verdict is malformed or used outside its event kind."""


class VerdictKindMismatch(VerdictError):
    """Raised when verdicts of different event kinds are combined."""

    def __init__(self, expected: str, actual: str):
        super().__init__(f"Cannot merge {actual} verdict into {expected} verdicts")
        self.expected = expected
        self.actual = actual
