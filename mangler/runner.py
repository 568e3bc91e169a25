"""Drive seed words through every configured mutation set."""

from __future__ import annotations

from dataclasses import dataclass, field
from time import perf_counter
from typing import Callable, List, Optional, Sequence, TextIO

from mangler.logging import get_logger
from mangler.mutation.mutation_set import MutationResult, MutationSet
from mangler.sources import SeedSource

__all__ = ["RunStats", "MutationRunner"]

logger = get_logger(__name__)


@dataclass
class RunStats:
    """Counters for one run.

    Attributes:
        words_in: Seed words consumed.
        words_out: Mutated words produced across all sets.
        started_at: ``perf_counter`` timestamp of the run start.
    """

    words_in: int = 0
    words_out: int = 0
    started_at: float = field(default_factory=perf_counter)

    def elapsed(self) -> float:
        return perf_counter() - self.started_at


class MutationRunner:
    """Apply each mutation set to each seed word and deliver the results.

    Every set is applied separately to the same seed word, giving one
    ``MutationResult`` per set. Results are appended to ``sink`` when one is
    given; otherwise each word is passed to ``emit``.

    Args:
        mutation_sets: Sets to apply, in order.
        sink: Open append-mode text stream for output lines.
        emit: Callback receiving each mutated word when there is no sink.
    """

    def __init__(
        self,
        mutation_sets: Sequence[MutationSet],
        sink: Optional[TextIO] = None,
        emit: Optional[Callable[[str], None]] = None,
    ) -> None:
        if not mutation_sets:
            raise ValueError("At least one mutation set is required.")
        self.mutation_sets: List[MutationSet] = list(mutation_sets)
        self.sink = sink
        self.emit = emit
        self.stats = RunStats()

    def mutate_word(self, word: str) -> List[MutationResult]:
        """Run ``word`` through every set and deliver the outputs.

        Raises:
            OSError: If writing to the sink fails.
        """
        self.stats.words_in += 1
        results: List[MutationResult] = []
        for mutation_set in self.mutation_sets:
            result = MutationResult(original_word=word)
            mutation_set.perform(result, word)

            if self.sink is not None:
                result.save_to_file(self.sink)
            elif self.emit is not None:
                for mutated in result.mutated_words:
                    self.emit(mutated)

            self.stats.words_out += len(result.mutated_words)
            results.append(result)
        return results

    def consume(self, source: SeedSource) -> int:
        """Mutate every word of ``source``; return the number of seeds consumed."""
        logger.info(f"Reading seed words from {source.name}")
        count = 0
        for word in source:
            self.mutate_word(word)
            count += 1
        logger.debug(f"Consumed {count} seed word(s) from {source.name}")
        return count
