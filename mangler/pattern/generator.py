"""Lazy combinatorial generator over a tokenized pattern.

The generator treats every character-class token as one digit of a
mixed-radix counter. Each step renders the current digits into a word and then
advances the counter with carry, rightmost digit fastest. Only the cursor
vector and one rendered word are held in memory, so a pattern describing
terabytes of output is enumerated in constant space.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Iterator, List, Sequence

from mangler.errors import EstimateOverflowWarning
from mangler.pattern.tokenizer import CharClass, Literal, Token, tokenize

__all__ = ["U64_MAX", "PatternEstimate", "PatternGenerator", "saturate"]


#: Estimates are reported as unsigned 64-bit values and clamp at this maximum.
U64_MAX = 2**64 - 1


def saturate(value: int) -> int:
    """Clamp ``value`` to ``U64_MAX``."""
    return value if value <= U64_MAX else U64_MAX


@dataclass(frozen=True)
class PatternEstimate:
    """Pre-run preview of a pattern's output.

    Attributes:
        total: Number of words the pattern renders (saturated).
        size_bytes: UTF-8 bytes of all rendered words, without separators (saturated).
        saturated: True when either value hit ``U64_MAX``.
    """

    total: int
    size_bytes: int
    saturated: bool


class PatternGenerator:
    """Enumerate every word a pattern describes, one at a time.

    A generator is single-pass: once exhausted it stays exhausted. Build a
    fresh instance for another pass; two fresh instances over the same tokens
    yield the same sequence.

    Args:
        tokens: Tokens as produced by ``tokenize``.
    """

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens: List[Token] = list(tokens)
        # Index into self._tokens for each counter digit, left to right
        self._class_positions: List[int] = [
            i for i, tok in enumerate(self._tokens) if isinstance(tok, CharClass)
        ]
        self._cursors: List[int] = [0] * len(self._class_positions)
        self._exhausted = False

    @classmethod
    def from_pattern(cls, pattern: str) -> "PatternGenerator":
        """Tokenize ``pattern`` and build a generator over it."""
        return cls(tokenize(pattern))

    @property
    def tokens(self) -> List[Token]:
        return list(self._tokens)

    def _classes(self) -> List[CharClass]:
        return [self._tokens[i] for i in self._class_positions]  # type: ignore[misc]

    def _exact_total(self) -> int:
        total = 1
        for cls in self._classes():
            total *= cls.size()
        return total

    def _exact_size(self) -> int:
        total = self._exact_total()
        if total == 0:
            return 0

        if all(len(set(cls.byte_widths())) == 1 for cls in self._classes()):
            word_width = 0
            for tok in self._tokens:
                if isinstance(tok, Literal):
                    word_width += tok.byte_width
                else:
                    word_width += tok.byte_widths()[0]
            return total * word_width

        # Mixed widths: each position contributes the sum of its candidate
        # widths times the number of combinations of all other positions.
        size = 0
        for tok in self._tokens:
            if isinstance(tok, Literal):
                size += tok.byte_width * total
            else:
                size += sum(tok.byte_widths()) * (total // tok.size())
        return size

    def calculate_total(self) -> int:
        """Return the number of words this pattern renders.

        Literal tokens contribute a factor of one. The result saturates at
        ``U64_MAX``; saturation emits ``EstimateOverflowWarning``.
        """
        exact = self._exact_total()
        if exact > U64_MAX:
            warnings.warn(
                f"word count exceeds {U64_MAX}; reporting saturated value",
                EstimateOverflowWarning,
                stacklevel=2,
            )
        return saturate(exact)

    def calculate_size(self) -> int:
        """Return the UTF-8 byte size of all rendered words, without separators.

        Saturates at ``U64_MAX`` like ``calculate_total``.
        """
        exact = self._exact_size()
        if exact > U64_MAX:
            warnings.warn(
                f"output size exceeds {U64_MAX} bytes; reporting saturated value",
                EstimateOverflowWarning,
                stacklevel=2,
            )
        return saturate(exact)

    def estimate(self) -> PatternEstimate:
        """Return count and size together, with a single overflow warning."""
        total = self._exact_total()
        size = self._exact_size()
        saturated = total > U64_MAX or size > U64_MAX
        if saturated:
            warnings.warn(
                "pattern estimate exceeds 64-bit range; reporting saturated values",
                EstimateOverflowWarning,
                stacklevel=2,
            )
        return PatternEstimate(
            total=saturate(total), size_bytes=saturate(size), saturated=saturated
        )

    def _render(self) -> str:
        parts = [
            tok.text if isinstance(tok, Literal) else "" for tok in self._tokens
        ]
        for digit, pos in enumerate(self._class_positions):
            cls = self._tokens[pos]
            parts[pos] = cls.members[self._cursors[digit]]  # type: ignore[union-attr]
        return "".join(parts)

    def _advance(self) -> None:
        """Add one to the counter, carrying leftwards; mark exhaustion on overflow."""
        for digit in range(len(self._cursors) - 1, -1, -1):
            radix = self._tokens[self._class_positions[digit]].size()  # type: ignore[union-attr]
            self._cursors[digit] += 1
            if self._cursors[digit] < radix:
                return
            self._cursors[digit] = 0
        self._exhausted = True

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if self._exhausted:
            raise StopIteration
        word = self._render()
        self._advance()
        return word

    def __repr__(self) -> str:
        pattern = "".join(str(tok) for tok in self._tokens)
        return f"PatternGenerator({pattern!r})"
