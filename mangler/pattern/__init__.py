"""Pattern tokenization and lazy combinatorial generation."""

from __future__ import annotations

from mangler.pattern.generator import (
    U64_MAX,
    PatternEstimate,
    PatternGenerator,
    saturate,
)
from mangler.pattern.tokenizer import (
    CHAR_CLASSES,
    ESCAPE,
    CharClass,
    Literal,
    Token,
    tokenize,
)

__all__ = [
    "CHAR_CLASSES",
    "ESCAPE",
    "CharClass",
    "Literal",
    "Token",
    "tokenize",
    "U64_MAX",
    "PatternEstimate",
    "PatternGenerator",
    "saturate",
]
