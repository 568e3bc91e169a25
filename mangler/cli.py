"""Command-line interface for mangler."""

from __future__ import annotations

import argparse
import logging
import sys
import warnings
from pathlib import Path
from time import perf_counter
from typing import Any, Callable, Iterator, List, Optional

from mangler.config import FANOUT_CONFIG, SCRAPE_CONFIG, FanOutConfig
from mangler.dsl.loader import load_mutation_sets_file
from mangler.errors import EstimateOverflowWarning
from mangler.logging import get_logger, set_global_log_level
from mangler.mutation.mutation_set import (
    MutationSet,
    check_fan_out,
    passthrough_mutation_set,
)
from mangler.pattern.generator import (
    U64_MAX,
    PatternEstimate,
    PatternGenerator,
    saturate,
)
from mangler.runner import MutationRunner, RunStats
from mangler.sources import SeedSource, file_seeds, pattern_seeds, website_seeds
from mangler.utils.output_paths import open_append_sink

logger = get_logger(__name__)


def _status(message: str = "") -> None:
    """Print a console status line; stdout is reserved for generated words."""
    print(message, file=sys.stderr)


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 6,
    max_col_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width
        max_col_width: Clip longer cells with an ASCII ellipsis

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    all_data = [[clip(h) for h in headers]] + [[clip(i) for i in row] for row in rows]
    col_widths = [
        max(max(len(row[col]) for row in all_data), min_width)
        for col in range(len(headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(all_data[0])]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in all_data[1:])
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _format_size(size_bytes: int) -> str:
    """Return ``size_bytes`` in bytes, MB, GB and TB (integer division)."""
    return (
        f"{size_bytes} bytes / {size_bytes // 2**20} MB / "
        f"{size_bytes // 2**30} GB / {size_bytes // 2**40} TB"
    )


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    """Return grammatically correct unit for count n."""
    if n == 1:
        return singular
    return plural or (singular + "s")


def _build_mutation_sets(
    mutation_string: Optional[str], mutations_file: Optional[Path]
) -> List[MutationSet]:
    """Collect inline and file-defined sets; fall back to a passthrough set."""
    mutation_sets: List[MutationSet] = []
    if mutation_string:
        mutation_sets.append(MutationSet.from_string(mutation_string, name="inline"))
    if mutations_file is not None:
        mutation_sets.extend(load_mutation_sets_file(mutations_file))

    if not mutation_sets:
        logger.warning("No mutation sets given; seed words pass through unchanged")
        mutation_sets.append(passthrough_mutation_set())
    return mutation_sets


def _print_mutation_sets(mutation_sets: List[MutationSet]) -> None:
    _status("Mutation sets:")
    for mutation_set in mutation_sets:
        _status(f"  {mutation_set.name}: {mutation_set.describe()}")


def _estimate_pattern(generator: PatternGenerator) -> PatternEstimate:
    """Compute a pattern preview, logging any saturation as a warning."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", EstimateOverflowWarning)
        estimate = generator.estimate()
    for warning in caught:
        logger.warning(str(warning.message))
    return estimate


def _print_pattern_estimate(pattern: str, estimate: PatternEstimate) -> None:
    prefix = ">= " if estimate.saturated else ""
    _status(
        f"Pattern {pattern!r} generates {prefix}{estimate.total} "
        f"{_plural(estimate.total, 'word')}"
    )
    _status(f"  size before mutations: {prefix}{_format_size(estimate.size_bytes)}")


def _console_emitter(
    stats: RunStats, one_line: bool, timer: bool
) -> Callable[[str], None]:
    """Build the callback that prints mutated words to stdout."""

    def emit(word: str) -> None:
        if timer:
            sys.stdout.write(f"(in {_format_duration(stats.elapsed())}) ")
        if one_line:
            sys.stdout.write(word + " ")
        else:
            sys.stdout.write(word + "\n")

    return emit


def _iter_sources(
    from_file: Optional[Path],
    from_pattern: Optional[str],
    from_website: Optional[str],
    timeout: float,
) -> Iterator[SeedSource]:
    """Yield seed sources in file, pattern, website order.

    The website is fetched only once earlier sources are consumed.
    """
    if from_file is not None:
        yield file_seeds(from_file)
    if from_pattern is not None:
        yield pattern_seeds(from_pattern)
    if from_website is not None:
        _status(f"Scraping words from {from_website}")
        yield website_seeds(from_website, timeout=timeout)


def _fan_out_config(max_fan_out: Optional[int]) -> FanOutConfig:
    return FanOutConfig(
        warn_threshold=FANOUT_CONFIG.warn_threshold,
        max_fan_out=max_fan_out if max_fan_out is not None else FANOUT_CONFIG.max_fan_out,
    )


def _run(
    from_file: Optional[Path],
    from_pattern: Optional[str],
    from_website: Optional[str],
    mutation_string: Optional[str],
    mutations_file: Optional[Path],
    output: Optional[Path],
    one_line: bool = False,
    timer: bool = False,
    max_fan_out: Optional[int] = None,
    timeout: float = SCRAPE_CONFIG.timeout,
) -> None:
    """Generate and mutate words from every given seed source.

    Parse errors in the pattern or rules are reported before any word is
    generated. Write failures abort the run.
    """
    _start_time = perf_counter()

    try:
        mutation_sets = _build_mutation_sets(mutation_string, mutations_file)
        check_fan_out(mutation_sets, _fan_out_config(max_fan_out))
        _print_mutation_sets(mutation_sets)

        if from_pattern is not None:
            estimate = _estimate_pattern(PatternGenerator.from_pattern(from_pattern))
            _print_pattern_estimate(from_pattern, estimate)

        if from_file is None and from_pattern is None and from_website is None:
            logger.warning("No seed source given; nothing to generate")

        sink = None
        if output is not None:
            _status(f"Writing words to {output}")
            sink = open_append_sink(output)

        try:
            runner = MutationRunner(mutation_sets, sink=sink)
            if sink is None:
                runner.emit = _console_emitter(runner.stats, one_line, timer)
            for source in _iter_sources(from_file, from_pattern, from_website, timeout):
                runner.consume(source)
        finally:
            if sink is not None:
                sink.close()

        if one_line and sink is None:
            sys.stdout.write("\n")
        sys.stdout.flush()

        stats = runner.stats
        _elapsed = perf_counter() - _start_time
        _status(
            f"✅ Finished in {_format_duration(_elapsed)}: "
            f"{stats.words_in} {_plural(stats.words_in, 'word')} -> "
            f"{stats.words_out} {_plural(stats.words_out, 'word')}"
        )
        logger.info(f"Run completed successfully in {_format_duration(_elapsed)}")

    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename}")
        _status(f"❌ ERROR: File not found: {e.filename}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to generate words: {type(e).__name__}: {e}")
        _status(f"❌ ERROR: Failed to generate words: {type(e).__name__}: {e}")
        sys.exit(1)


def _inspect(
    from_file: Optional[Path],
    from_pattern: Optional[str],
    from_website: Optional[str],
    mutation_string: Optional[str],
    mutations_file: Optional[Path],
    max_fan_out: Optional[int] = None,
) -> None:
    """Validate rules and pattern and print previews without generating words."""
    try:
        mutation_sets = _build_mutation_sets(mutation_string, mutations_file)
        check_fan_out(mutation_sets, _fan_out_config(max_fan_out))

        rows = [
            [ms.name, str(len(ms.mutations)), str(ms.fan_out_bound()), ms.describe()]
            for ms in mutation_sets
        ]
        _status("Mutation sets:")
        _status(
            _format_table(["Set", "Rules", "Fan-out", "Pipeline"], rows, max_col_width=60)
        )

        if from_pattern is not None:
            estimate = _estimate_pattern(PatternGenerator.from_pattern(from_pattern))
            _print_pattern_estimate(from_pattern, estimate)
            bound = sum(ms.fan_out_bound() for ms in mutation_sets)
            mutated = estimate.total * bound
            total_capped = estimate.saturated and estimate.total == U64_MAX
            if (total_capped and bound) or mutated > U64_MAX:
                _status(f"  up to >= {saturate(mutated)} words after mutations")
            else:
                _status(f"  at most {mutated} {_plural(mutated, 'word')} after mutations")
        if from_file is not None:
            _status(f"Seed file: {from_file}")
        if from_website is not None:
            _status(f"Seed website: {from_website} (not fetched)")

        logger.info("Inspection completed successfully")

    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename}")
        _status(f"❌ ERROR: File not found: {e.filename}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to inspect: {type(e).__name__}: {e}")
        _status(f"❌ ERROR: Failed to inspect: {type(e).__name__}: {e}")
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``mangler`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="mangler",
        description="Generate and mutate candidate wordlists.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser("run", help="Generate and mutate words")
    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate rules and preview pattern sizes"
    )

    for p in (run_parser, inspect_parser):
        p.add_argument(
            "--from-file", "-i", type=Path, default=None, help="Read seed words from file lines"
        )
        p.add_argument(
            "--from-pattern",
            "-p",
            default=None,
            help="Generate seed words from a pattern (%%l %%u %%d %%s classes, %%%% for '%%')",
        )
        p.add_argument(
            "--from-website", "-w", default=None, help="Scrape seed words from a web page"
        )
        p.add_argument(
            "--mutation-string",
            "-m",
            default=None,
            help="Inline mutation rules separated by spaces",
        )
        p.add_argument(
            "--mutations-file",
            "-f",
            type=Path,
            default=None,
            help="YAML document defining named mutation sets",
        )
        p.add_argument(
            "--max-fan-out",
            type=int,
            default=None,
            help="Refuse mutation sets that may produce more words per seed",
        )

    run_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Append words to this file instead of printing them",
    )
    run_parser.add_argument(
        "--one-line", action="store_true", help="Print words space-separated on one line"
    )
    run_parser.add_argument(
        "--timer", action="store_true", help="Prefix printed words with elapsed time"
    )
    run_parser.add_argument(
        "--timeout",
        type=float,
        default=SCRAPE_CONFIG.timeout,
        help="Seconds to wait when fetching --from-website",
    )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "run":
        _run(
            from_file=args.from_file,
            from_pattern=args.from_pattern,
            from_website=args.from_website,
            mutation_string=args.mutation_string,
            mutations_file=args.mutations_file,
            output=args.output,
            one_line=args.one_line,
            timer=args.timer,
            max_fan_out=args.max_fan_out,
            timeout=args.timeout,
        )
    elif args.command == "inspect":
        _inspect(
            from_file=args.from_file,
            from_pattern=args.from_pattern,
            from_website=args.from_website,
            mutation_string=args.mutation_string,
            mutations_file=args.mutations_file,
            max_fan_out=args.max_fan_out,
        )


if __name__ == "__main__":
    main()
