from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from line_distributor.errors import SourceReadError
from line_distributor.sources import STDIN_NAME, FileLineSource


def test_strips_lf_and_crlf_terminators(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_bytes(b"a\r\nb\nc")

    with FileLineSource(path) as src:
        assert list(src.lines()) == ["a", "b", "c"]


def test_blank_lines_are_kept(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_bytes(b"a\n\n\nb\n")

    with FileLineSource(path) as src:
        assert list(src.lines()) == ["a", "", "", "b"]


def test_lone_carriage_return_is_not_a_line_break(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_bytes(b"a\rb\n")

    with FileLineSource(path) as src:
        assert list(src.lines()) == ["a\rb"]


def test_utf8_content(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_text("héllo\nwörld\n", encoding="utf-8")

    with FileLineSource(path) as src:
        assert list(src.lines()) == ["héllo", "wörld"]


def test_missing_file_is_a_read_error(tmp_path: Path) -> None:
    missing = tmp_path / "nope.txt"
    with pytest.raises(SourceReadError) as excinfo:
        with FileLineSource(missing):
            pass
    assert excinfo.value.path == missing
    assert str(missing) in str(excinfo.value)


def test_invalid_utf8_names_the_line(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_bytes(b"ok\n\xff\xfe\n")

    with FileLineSource(path) as src:
        it = src.lines()
        assert next(it) == "ok"
        with pytest.raises(SourceReadError, match="line 2"):
            next(it)


def test_from_stream_does_not_close_callers_stream() -> None:
    stream = io.BytesIO(b"x\ny\n")
    with FileLineSource.from_stream(stream, "buf") as src:
        assert src.name == "buf"
        assert list(src.lines()) == ["x", "y"]
    assert not stream.closed


def test_reads_stdin_when_no_path(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_stdin = io.TextIOWrapper(io.BytesIO(b"one\ntwo\n"), encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", fake_stdin)

    with FileLineSource() as src:
        assert src.name == STDIN_NAME
        assert list(src.lines()) == ["one", "two"]
    assert not fake_stdin.closed


def test_file_is_closed_on_exit(tmp_path: Path) -> None:
    path = tmp_path / "in.txt"
    path.write_bytes(b"a\n")

    src = FileLineSource(path)
    with src:
        stream = src._stream
        assert stream is not None
    assert stream.closed
