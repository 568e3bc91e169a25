from __future__ import annotations

from pathlib import Path

from mangler.utils.output_paths import ensure_parent_dir, open_append_sink


def test_ensure_parent_dir_creates_directories(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "out.txt"
    ensure_parent_dir(target)
    assert target.parent.is_dir()
    assert not target.exists()


def test_open_append_sink_appends(tmp_path: Path) -> None:
    target = tmp_path / "lists" / "words.txt"
    with open_append_sink(target) as sink:
        sink.write("one\n")
    with open_append_sink(target) as sink:
        sink.write("two\n")
    assert target.read_bytes() == b"one\ntwo\n"
