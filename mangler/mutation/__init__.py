"""Mutation rules and pipelines."""

from __future__ import annotations

from mangler.mutation.mutation_set import (
    MutationResult,
    MutationSet,
    check_fan_out,
    passthrough_mutation_set,
)
from mangler.mutation.rules import (
    Mutation,
    MutationKind,
    parse_mutation,
    parse_mutation_string,
)

__all__ = [
    "Mutation",
    "MutationKind",
    "MutationResult",
    "MutationSet",
    "check_fan_out",
    "parse_mutation",
    "parse_mutation_string",
    "passthrough_mutation_set",
]
