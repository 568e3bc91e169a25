"""Validate the mutation-set documents shipped under ``examples/``."""

from __future__ import annotations

from pathlib import Path

import pytest

from mangler.dsl.loader import load_mutation_sets_file

EXAMPLES_DIR = Path(__file__).resolve().parents[2] / "examples"


@pytest.mark.parametrize("path", sorted(EXAMPLES_DIR.glob("*.yaml")), ids=lambda p: p.name)
def test_example_document_loads(path: Path) -> None:
    sets = load_mutation_sets_file(path)
    assert sets
    assert all(s.name for s in sets)


def test_common_shapes_fan_out() -> None:
    sets = load_mutation_sets_file(EXAMPLES_DIR / "mutation_sets.yaml")
    bounds = {s.name: s.fan_out_bound() for s in sets}
    assert bounds == {
        "plain": 1,
        "capitalized": 1,
        "capital_year": 3,
        "leet_bang": 6,
        "reversed_short": 1,
    }
