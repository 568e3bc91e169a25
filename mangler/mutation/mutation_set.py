"""Mutation sets and their per-word results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, TextIO

from mangler.config import FANOUT_CONFIG, FanOutConfig
from mangler.errors import FanOutLimitError
from mangler.logging import get_logger
from mangler.mutation.rules import Mutation, MutationKind, parse_mutation_string

__all__ = [
    "MutationResult",
    "MutationSet",
    "passthrough_mutation_set",
    "check_fan_out",
]

logger = get_logger(__name__)


@dataclass
class MutationResult:
    """Words produced from one seed word by one mutation set.

    Attributes:
        original_word: Seed word the set was applied to.
        mutated_words: Output words in generation order; duplicates are kept.
    """

    original_word: str
    mutated_words: List[str] = field(default_factory=list)

    def save_to_file(self, sink: TextIO) -> None:
        """Write every mutated word as one line to an open append-mode sink.

        Write errors propagate to the caller.
        """
        for word in self.mutated_words:
            sink.write(word + "\n")


@dataclass
class MutationSet:
    """An ordered pipeline of mutation rules.

    Attributes:
        name: Label used in summaries and logs.
        mutations: Rules in application order.
    """

    name: str
    mutations: List[Mutation] = field(default_factory=list)

    @classmethod
    def from_string(cls, text: str, name: str = "inline") -> "MutationSet":
        """Build a set from whitespace-delimited inline rule descriptors."""
        return cls(name=name, mutations=parse_mutation_string(text))

    def perform(self, result: MutationResult, word: str) -> None:
        """Run the pipeline on ``word`` and append the outputs to ``result``.

        Each rule is flat-mapped over the current working list, so branching
        rules multiply: a 1:2 rule followed by a 1:3 rule yields up to six
        words. An empty set appends nothing.
        """
        if not self.mutations:
            return

        working = [word]
        for mutation in self.mutations:
            working = [out for current in working for out in mutation.apply(current)]
            if not working:
                break
        result.mutated_words.extend(working)

    def fan_out_bound(self) -> int:
        """Upper bound of output words per input word (product of branch factors)."""
        if not self.mutations:
            return 0
        bound = 1
        for mutation in self.mutations:
            bound *= mutation.branch_factor
        return bound

    def descriptors(self) -> List[str]:
        return [m.descriptor for m in self.mutations]

    def describe(self) -> str:
        """Return a ``word -> rule -> rule`` summary line."""
        return " -> ".join(["word", *self.descriptors()])


def passthrough_mutation_set() -> MutationSet:
    """Set that copies every seed word unchanged."""
    return MutationSet(name="passthrough", mutations=[Mutation(MutationKind.NOTHING)])


def check_fan_out(
    mutation_sets: Iterable[MutationSet], config: FanOutConfig = FANOUT_CONFIG
) -> None:
    """Validate static fan-out of each set before any word is generated.

    Raises:
        FanOutLimitError: If a set may exceed ``config.max_fan_out`` words per input.
    """
    for mutation_set in mutation_sets:
        bound = mutation_set.fan_out_bound()
        if config.exceeds_limit(bound):
            raise FanOutLimitError(
                f"Mutation set '{mutation_set.name}' may produce {bound} words per "
                f"input, above the limit of {config.max_fan_out}"
            )
        if config.exceeds_warning(bound):
            logger.warning(
                f"Mutation set '{mutation_set.name}' may produce up to {bound} "
                "words per input word"
            )
        else:
            logger.debug(f"Mutation set '{mutation_set.name}' fan-out bound: {bound}")
