"""Pattern tokenizer.

A pattern is a template of literal characters and character-class
placeholders. The escape sigil ``%`` followed by a class identifier stands for
one position drawn from that class:

- ``%l``: lowercase letters ``a``-``z``
- ``%u``: uppercase letters ``A``-``Z``
- ``%d``: digits ``0``-``9``
- ``%s``: ASCII punctuation
- ``%%``: a literal ``%``

Example:
    >>> [str(t) for t in tokenize("a%db%l")]
    ['a', '%d', 'b', '%l']
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from mangler.errors import PatternParseError

__all__ = [
    "ESCAPE",
    "CHAR_CLASSES",
    "Literal",
    "CharClass",
    "Token",
    "tokenize",
]

ESCAPE = "%"


@dataclass(frozen=True)
class Literal:
    """A fixed piece of text rendered as-is."""

    text: str

    @property
    def byte_width(self) -> int:
        return len(self.text.encode("utf-8"))

    def __str__(self) -> str:
        return ESCAPE * 2 if self.text == ESCAPE else self.text


@dataclass(frozen=True)
class CharClass:
    """An ordered, finite set of candidate characters for one position.

    Args:
        identifier: Class identifier used after the escape sigil.
        members: Candidate characters in enumeration order.
    """

    identifier: str
    members: Tuple[str, ...]

    def size(self) -> int:
        return len(self.members)

    def byte_widths(self) -> List[int]:
        return [len(m.encode("utf-8")) for m in self.members]

    def __str__(self) -> str:
        return f"{ESCAPE}{self.identifier}"


Token = Union[Literal, CharClass]

CHAR_CLASSES: Dict[str, CharClass] = {
    "l": CharClass("l", tuple(string.ascii_lowercase)),
    "u": CharClass("u", tuple(string.ascii_uppercase)),
    "d": CharClass("d", tuple(string.digits)),
    "s": CharClass("s", tuple(string.punctuation)),
}


def tokenize(pattern: str) -> List[Token]:
    """Split ``pattern`` into literal and character-class tokens.

    Args:
        pattern: Pattern string.

    Returns:
        Tokens in pattern order. Each literal character is its own token.

    Raises:
        PatternParseError: On a trailing escape sigil or an unknown class
            identifier.
    """
    tokens: List[Token] = []
    pos = 0
    while pos < len(pattern):
        ch = pattern[pos]
        if ch != ESCAPE:
            tokens.append(Literal(ch))
            pos += 1
            continue

        if pos + 1 >= len(pattern):
            raise PatternParseError("Unterminated escape", pattern, pos)
        ident = pattern[pos + 1]
        if ident == ESCAPE:
            tokens.append(Literal(ESCAPE))
        elif ident in CHAR_CLASSES:
            tokens.append(CHAR_CLASSES[ident])
        else:
            raise PatternParseError(
                f"Unknown character class '{ESCAPE}{ident}'", pattern, pos
            )
        pos += 2
    return tokens
