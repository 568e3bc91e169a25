"""Exception and warning types raised by mangler."""

from __future__ import annotations

__all__ = [
    "PatternParseError",
    "MutationParseError",
    "FanOutLimitError",
    "EstimateOverflowWarning",
]


class PatternParseError(ValueError):
    """A pattern string could not be tokenized.

    Attributes:
        pattern: The offending pattern.
        position: Character index where parsing failed.
    """

    def __init__(self, message: str, pattern: str, position: int) -> None:
        super().__init__(f"{message} at position {position} in pattern {pattern!r}")
        self.pattern = pattern
        self.position = position


class MutationParseError(ValueError):
    """A mutation rule descriptor was not recognized."""

    def __init__(self, message: str, descriptor: str) -> None:
        super().__init__(f"{message}: {descriptor!r}")
        self.descriptor = descriptor


class FanOutLimitError(ValueError):
    """A mutation set could branch into more words than allowed."""


class EstimateOverflowWarning(UserWarning):
    """A count or size estimate saturated at the 64-bit maximum."""
