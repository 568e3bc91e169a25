"""mangler: pattern-driven wordlist generation and mutation.

mangler enumerates every word a compact pattern describes and runs seed
words through ordered pipelines of mutation rules.

Primary API:
    PatternGenerator - Lazy enumeration of a pattern, with count/size previews
    tokenize() - Parse a pattern into literal and character-class tokens
    MutationSet - Ordered rule pipeline applied to one word
    MutationResult - Words one set produced from one seed word
    parse_mutation() / parse_mutation_string() - Rule descriptor parsing
    load_mutation_sets_yaml() - Named sets from a YAML document
    MutationRunner - Feed seed sources through every set

Example:
    from mangler import MutationResult, MutationSet, PatternGenerator

    gen = PatternGenerator.from_pattern("pass%d%d")
    print(gen.calculate_total())  # 100

    leet = MutationSet.from_string("leet append_any(!, 123)")
    for word in gen:
        result = MutationResult(original_word=word)
        leet.perform(result, word)
"""

from __future__ import annotations

from mangler import cli, logging
from mangler._version import __version__
from mangler.dsl.loader import load_mutation_sets_file, load_mutation_sets_yaml
from mangler.errors import (
    EstimateOverflowWarning,
    FanOutLimitError,
    MutationParseError,
    PatternParseError,
)
from mangler.mutation import (
    Mutation,
    MutationKind,
    MutationResult,
    MutationSet,
    parse_mutation,
    parse_mutation_string,
)
from mangler.pattern import U64_MAX, PatternEstimate, PatternGenerator, tokenize
from mangler.runner import MutationRunner, RunStats
from mangler.sources import SeedSource, file_seeds, pattern_seeds, website_seeds

__all__ = [
    # Version
    "__version__",
    # Patterns
    "tokenize",
    "PatternGenerator",
    "PatternEstimate",
    "U64_MAX",
    # Mutations
    "Mutation",
    "MutationKind",
    "MutationSet",
    "MutationResult",
    "parse_mutation",
    "parse_mutation_string",
    "load_mutation_sets_yaml",
    "load_mutation_sets_file",
    # Orchestration
    "MutationRunner",
    "RunStats",
    "SeedSource",
    "file_seeds",
    "pattern_seeds",
    "website_seeds",
    # Errors
    "PatternParseError",
    "MutationParseError",
    "FanOutLimitError",
    "EstimateOverflowWarning",
    # Utilities
    "cli",
    "logging",
]
