"""Mutation-set document loading.

Public API:
    load_mutation_sets_yaml: parse a YAML string into MutationSet objects.
    load_mutation_sets_file: same, reading from a file path.
"""

from __future__ import annotations

from mangler.dsl.loader import (
    build_mutation_sets,
    load_mutation_document,
    load_mutation_sets_file,
    load_mutation_sets_yaml,
)

__all__ = [
    "build_mutation_sets",
    "load_mutation_document",
    "load_mutation_sets_file",
    "load_mutation_sets_yaml",
]
