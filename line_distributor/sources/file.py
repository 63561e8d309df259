"""
FileLineSource - reads UTF-8 lines from a file path or standard input.
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

from ..errors import SourceReadError
from ..logging_config import logger
from .base import LineSource

STDIN_NAME = "<stdin>"


def _strip_terminator(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


class FileLineSource(LineSource):
    """
    Line source over a binary stream.

    * ``path=None`` reads standard input; stdin is never closed by us.
    * A trailing ``\\n`` or ``\\r\\n`` is stripped from every line.
    * Invalid UTF-8 and I/O failures surface as ``SourceReadError``.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        *,
        encoding: str = "utf-8",
    ) -> None:
        self.path = Path(path) if path is not None else None
        self.name = str(self.path) if self.path is not None else STDIN_NAME
        self._encoding = encoding
        self._stream: BinaryIO | None = None
        self._owns_stream = False

    @classmethod
    def from_stream(
        cls,
        stream: BinaryIO,
        name: str = STDIN_NAME,
        *,
        encoding: str = "utf-8",
    ) -> "FileLineSource":
        """Wrap an already-open binary stream; the caller keeps ownership."""
        src = cls(encoding=encoding)
        src.name = name
        src._stream = stream
        return src

    # ------------------------------------------------------------------ #
    # Stream lifecycle                                                   #
    # ------------------------------------------------------------------ #
    def __enter__(self) -> "FileLineSource":
        self._open()
        return self

    def _open(self) -> BinaryIO:
        if self._stream is not None:
            return self._stream
        if self.path is None:
            self._stream = sys.stdin.buffer
            return self._stream
        try:
            self._stream = open(self.path, "rb")
        except OSError as exc:
            raise SourceReadError(
                f"cannot open input {self.path}: {exc.strerror or exc}",
                path=self.path,
            ) from exc
        self._owns_stream = True
        logger.debug("Opened input %s", self.path)
        return self._stream

    def close(self) -> None:
        if self._stream is not None and self._owns_stream:
            self._stream.close()
        self._stream = None
        self._owns_stream = False

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #
    def lines(self) -> Iterator[str]:
        stream = self._open()
        lineno = 0
        while True:
            try:
                raw = stream.readline()
            except OSError as exc:
                raise SourceReadError(
                    f"error reading {self.name} after line {lineno}: {exc}",
                    path=self.path,
                ) from exc
            if not raw:
                return
            lineno += 1
            try:
                line = _strip_terminator(raw).decode(self._encoding)
            except UnicodeDecodeError as exc:
                raise SourceReadError(
                    f"{self.name} line {lineno} is not valid {self._encoding}: {exc.reason}",
                    path=self.path,
                ) from exc
            yield line

    def __repr__(self) -> str:
        return f"<FileLineSource name='{self.name}'>"
