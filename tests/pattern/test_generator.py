from __future__ import annotations

import itertools
import warnings

import pytest

from mangler.errors import EstimateOverflowWarning
from mangler.pattern.generator import U64_MAX, PatternGenerator, saturate
from mangler.pattern.tokenizer import CharClass, Literal, tokenize


def test_literal_only_pattern_single_output() -> None:
    gen = PatternGenerator.from_pattern("password")
    assert gen.calculate_total() == 1
    assert list(gen) == ["password"]


def test_literal_only_pattern_size() -> None:
    gen = PatternGenerator.from_pattern("héllo")
    assert gen.calculate_size() == len("héllo".encode("utf-8"))


def test_empty_pattern_yields_empty_word_once() -> None:
    assert list(PatternGenerator.from_pattern("")) == [""]


def test_digit_lower_pattern_order_and_count() -> None:
    gen = PatternGenerator.from_pattern("a%db%l")
    assert gen.calculate_total() == 260

    words = list(gen)
    assert len(words) == 260
    assert len(set(words)) == 260
    assert all(len(w) == 4 for w in words)
    assert words[0] == "a0ba"
    assert words[1] == "a0bb"
    assert words[25] == "a0bz"
    assert words[26] == "a1ba"
    assert words[-1] == "a9bz"


def test_size_uniform_width() -> None:
    gen = PatternGenerator.from_pattern("a%db%l")
    assert gen.calculate_size() == 260 * 4


def test_matches_itertools_product() -> None:
    gen = PatternGenerator.from_pattern("%u%d")
    expected = [a + b for a, b in itertools.product("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "0123456789")]
    assert list(gen) == expected


def test_generator_is_single_pass() -> None:
    gen = PatternGenerator.from_pattern("%d")
    assert len(list(gen)) == 10
    assert list(gen) == []
    with pytest.raises(StopIteration):
        next(gen)


def test_fresh_generators_identical_sequences() -> None:
    tokens = tokenize("x%d%s")
    first = PatternGenerator(tokens)
    second = PatternGenerator(tokens)

    # Advance one instance before draining the other to catch shared state
    head = next(first)
    all_second = list(second)

    assert len(all_second) == 10 * 32
    assert all_second[0] == head == "x0!"
    assert all_second[1:] == list(first)


def test_iteration_is_lazy() -> None:
    # 26**12 words; only the first few are ever rendered
    gen = PatternGenerator.from_pattern("%l" * 12)
    head = list(itertools.islice(gen, 3))
    assert head == ["a" * 12, "a" * 11 + "b", "a" * 11 + "c"]


def test_mixed_width_size_sums_positions() -> None:
    wide = CharClass("w", ("a", "é", "€"))  # widths 1, 2, 3
    digits = CharClass("d", tuple("01"))
    gen = PatternGenerator([Literal("x"), wide, digits])

    words = list(PatternGenerator([Literal("x"), wide, digits]))
    actual = sum(len(w.encode("utf-8")) for w in words)

    assert gen.calculate_total() == 6
    assert gen.calculate_size() == actual == 6 * 1 + (1 + 2 + 3) * 2 + 2 * 3


def test_total_saturates_above_u64() -> None:
    # 10**20 > 2**64
    gen = PatternGenerator.from_pattern("%d" * 20)
    with pytest.warns(EstimateOverflowWarning):
        total = gen.calculate_total()
    assert total == U64_MAX


def test_size_saturates_above_u64() -> None:
    gen = PatternGenerator.from_pattern("%d" * 19)
    # 10**19 words fit, but 19 bytes each do not
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert gen.calculate_total() == 10**19
    with pytest.warns(EstimateOverflowWarning):
        assert gen.calculate_size() == U64_MAX


def test_estimate_reports_saturation_flag() -> None:
    small = PatternGenerator.from_pattern("%d%d").estimate()
    assert small.total == 100
    assert small.size_bytes == 200
    assert small.saturated is False

    with pytest.warns(EstimateOverflowWarning):
        big = PatternGenerator.from_pattern("%s" * 20).estimate()
    assert big.saturated is True
    assert big.total == U64_MAX


def test_saturate_helper() -> None:
    assert saturate(5) == 5
    assert saturate(U64_MAX) == U64_MAX
    assert saturate(U64_MAX + 1) == U64_MAX


def test_repr_shows_pattern() -> None:
    assert repr(PatternGenerator.from_pattern("a%d%%")) == "PatternGenerator('a%d%%')"
