"""Seed-word sources.

Each source pairs a word stream with an explicit deduplication policy. Words
scraped from a page are deduplicated (the same token repeats across menus and
footers); file lines and pattern output are passed through untouched, so a
wordlist file with repeated lines yields repeated seeds.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Set

from mangler.logging import get_logger
from mangler.pattern.generator import PatternGenerator
from mangler.scraper import download_page, extract_words

__all__ = [
    "SeedSource",
    "file_seeds",
    "pattern_seeds",
    "website_seeds",
    "iter_seed_words",
]

logger = get_logger(__name__)


@dataclass
class SeedSource:
    """A named stream of seed words.

    Attributes:
        name: Human-readable origin (path, pattern or URL).
        words: Iterable of words; may be a single-pass iterator.
        deduplicate: When True, only the first occurrence of a word is yielded.
    """

    name: str
    words: Iterable[str]
    deduplicate: bool = False

    def __iter__(self) -> Iterator[str]:
        return iter_seed_words(self)


def iter_seed_words(source: SeedSource) -> Iterator[str]:
    """Yield the source's words, honouring its deduplication flag."""
    if not source.deduplicate:
        yield from source.words
        return

    seen: Set[str] = set()
    for word in source.words:
        if word in seen:
            continue
        seen.add(word)
        yield word


def _read_lines(path: Path) -> Iterator[str]:
    with open(path, "r", encoding="utf-8", newline="") as fh:
        for line in fh:
            yield line.rstrip("\r\n")


def file_seeds(path: Path) -> SeedSource:
    """Seed words from the lines of a UTF-8 text file, read lazily.

    The file is opened when iteration starts; a missing file raises
    ``FileNotFoundError`` at that point.
    """
    return SeedSource(name=str(path), words=_read_lines(Path(path)), deduplicate=False)


def pattern_seeds(pattern: str) -> SeedSource:
    """Seed words enumerated from a pattern.

    Raises:
        PatternParseError: If the pattern is malformed.
    """
    return SeedSource(
        name=pattern, words=PatternGenerator.from_pattern(pattern), deduplicate=False
    )


def website_seeds(url: str, timeout: Optional[float] = None) -> SeedSource:
    """Seed words scraped from the body text of a web page.

    The page is fetched immediately so network failures surface before any
    word is generated.
    """
    words = extract_words(download_page(url, timeout=timeout))
    logger.info(f"Extracted {len(words)} words from {url}")
    return SeedSource(name=url, words=words, deduplicate=True)
