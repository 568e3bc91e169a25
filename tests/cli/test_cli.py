from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mangler import cli


def test_no_args_prints_help_and_exits_zero(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main([])
    assert exc.value.code == 0
    assert "usage: mangler" in capsys.readouterr().out


def test_run_pattern_to_stdout(capsys) -> None:
    cli.main(["run", "-p", "a%d", "-m", "uppercase_first"])
    out = capsys.readouterr().out
    assert out.splitlines() == [f"A{i}" for i in range(10)]


def test_run_one_line(capsys) -> None:
    cli.main(["run", "-p", "x%d", "-m", "nothing", "--one-line"])
    out = capsys.readouterr().out
    assert out == " ".join(f"x{i}" for i in range(10)) + " \n"


def test_run_without_rules_passes_words_through(tmp_path: Path, capsys, caplog) -> None:
    seeds = tmp_path / "seeds.txt"
    seeds.write_text("alpha\nbeta\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="mangler"):
        cli.main(["run", "-i", str(seeds)])
    assert capsys.readouterr().out.splitlines() == ["alpha", "beta"]
    assert any("pass through unchanged" in r.message for r in caplog.records)


def test_run_appends_to_output_file(tmp_path: Path, capsys) -> None:
    seeds = tmp_path / "seeds.txt"
    seeds.write_text("cat\n", encoding="utf-8")
    sets = tmp_path / "sets.yaml"
    sets.write_text(
        "mutation_sets:\n  plain: [nothing]\n  loud: [uppercase_all, 'append_any(!, ?)']\n",
        encoding="utf-8",
    )
    out = tmp_path / "nested" / "out.txt"

    cli.main(["run", "-i", str(seeds), "-f", str(sets), "-o", str(out)])
    cli.main(["run", "-i", str(seeds), "-m", "reverse", "-o", str(out)])

    assert out.read_text(encoding="utf-8").splitlines() == [
        "cat",
        "CAT!",
        "CAT?",
        "tac",
    ]
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Finished" in captured.err


def test_run_invalid_pattern_exits_before_generation(tmp_path: Path, capsys) -> None:
    out = tmp_path / "out.txt"
    with pytest.raises(SystemExit) as exc:
        cli.main(["run", "-p", "abc%q", "-m", "nothing", "-o", str(out)])
    assert exc.value.code == 1
    assert "PatternParseError" in capsys.readouterr().err
    assert not out.exists()


def test_run_invalid_rule_exits(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["run", "-p", "a", "-m", "explode"])
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert "MutationParseError" in err


def test_run_missing_seed_file(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["run", "-i", str(tmp_path / "nope.txt")])
    assert exc.value.code == 1
    assert "File not found" in capsys.readouterr().err


def test_run_fan_out_limit(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        cli.main(["run", "-p", "a", "-m", "leet leet", "--max-fan-out", "3"])
    assert exc.value.code == 1
    assert "FanOutLimitError" in capsys.readouterr().err


def test_run_website_source(monkeypatch, capsys) -> None:
    from mangler import sources

    monkeypatch.setattr(
        sources, "download_page", lambda url, timeout=None: "<body>a b a</body>"
    )
    cli.main(["run", "-w", "https://example.com", "-m", "append(1)"])
    assert capsys.readouterr().out.splitlines() == ["a1", "b1"]


def test_inspect_prints_estimates(capsys) -> None:
    cli.main(["inspect", "-p", "a%db%l", "-m", "leet append_any(1, 2, 3)"])
    err = capsys.readouterr().err
    assert "generates 260 words" in err
    assert "1040 bytes" in err
    assert "at most 1560 words after mutations" in err
    assert "word -> leet -> append_any(1, 2, 3)" in err


def test_inspect_saturated_pattern_logs_warning(capsys, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="mangler"):
        cli.main(["inspect", "-p", "%d" * 25])
    assert "generates >= 18446744073709551615 words" in capsys.readouterr().err
    assert any("64-bit" in r.message for r in caplog.records)


def test_inspect_saturated_pattern_marks_mutated_bound(capsys) -> None:
    cli.main(["inspect", "-p", "%d" * 25, "-m", "leet"])
    err = capsys.readouterr().err
    assert "up to >= 18446744073709551615 words after mutations" in err
    assert "at most" not in err


def test_inspect_mutated_bound_clamps_at_u64(capsys) -> None:
    # 10**19 words fit in 64 bits (only the byte size saturates); leet doubles past it
    cli.main(["inspect", "-p", "%d" * 19, "-m", "leet"])
    err = capsys.readouterr().err
    assert "generates >= 10000000000000000000 words" in err
    assert "up to >= 18446744073709551615 words after mutations" in err


def test_inspect_does_not_fetch_website(monkeypatch, capsys) -> None:
    from mangler import sources

    def fail(*args, **kwargs):
        raise AssertionError("should not fetch")

    monkeypatch.setattr(sources, "download_page", fail)
    cli.main(["inspect", "-w", "https://example.com"])
    assert "not fetched" in capsys.readouterr().err


def test_verbose_and_quiet_switch_levels(capsys, caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="mangler"):
        cli.main(["--verbose", "inspect", "-m", "nothing"])
    assert any("Debug logging enabled" in r.message for r in caplog.records)

    caplog.clear()
    with caplog.at_level(logging.INFO, logger="mangler"):
        cli.main(["--quiet", "inspect", "-m", "nothing"])
    assert not any(r.levelno == logging.INFO for r in caplog.records)
