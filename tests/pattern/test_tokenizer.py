from __future__ import annotations

import string

import pytest

from mangler.errors import PatternParseError
from mangler.pattern.tokenizer import CHAR_CLASSES, CharClass, Literal, tokenize


def test_tokenize_literals_only() -> None:
    tokens = tokenize("abc")
    assert tokens == [Literal("a"), Literal("b"), Literal("c")]


def test_tokenize_mixed_pattern() -> None:
    tokens = tokenize("a%db%l")
    assert tokens == [
        Literal("a"),
        CHAR_CLASSES["d"],
        Literal("b"),
        CHAR_CLASSES["l"],
    ]
    assert [str(t) for t in tokens] == ["a", "%d", "b", "%l"]


def test_builtin_classes_members() -> None:
    assert "".join(CHAR_CLASSES["l"].members) == string.ascii_lowercase
    assert "".join(CHAR_CLASSES["u"].members) == string.ascii_uppercase
    assert "".join(CHAR_CLASSES["d"].members) == string.digits
    assert "".join(CHAR_CLASSES["s"].members) == string.punctuation
    assert CHAR_CLASSES["d"].size() == 10


def test_escaped_percent_is_literal() -> None:
    tokens = tokenize("100%%")
    assert tokens[-1] == Literal("%")
    assert all(isinstance(t, Literal) for t in tokens)
    assert str(tokens[-1]) == "%%"


def test_empty_pattern_has_no_tokens() -> None:
    assert tokenize("") == []


def test_unicode_literal_kept_whole() -> None:
    tokens = tokenize("é%d")
    assert tokens[0] == Literal("é")
    assert tokens[0].byte_width == 2
    assert isinstance(tokens[1], CharClass)


def test_trailing_escape_raises() -> None:
    with pytest.raises(PatternParseError) as exc:
        tokenize("abc%")
    assert exc.value.position == 3
    assert "Unterminated escape" in str(exc.value)


def test_unknown_class_raises() -> None:
    with pytest.raises(PatternParseError) as exc:
        tokenize("a%x")
    assert exc.value.position == 1
    assert "%x" in str(exc.value)


def test_parse_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        tokenize("%q")
