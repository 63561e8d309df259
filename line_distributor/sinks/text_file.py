"""
TextFileSink - plain buffered append to a file.
"""
from __future__ import annotations

import io
from pathlib import Path

from ..errors import SinkOpenError, SinkWriteError
from ..logging_config import logger


class TextFileSink:
    """
    Append-mode file sink.

    * The file is created if absent; existing content is never truncated.
    * Writes go through a buffered writer; ``flush``/``close`` push them out.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._fp: io.BufferedWriter | None = None

    # ------------------------------------------------------------------ #
    # Context-manager helpers                                            #
    # ------------------------------------------------------------------ #
    def __enter__(self) -> "TextFileSink":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self.close()
            return
        # keep the error that is already unwinding
        try:
            self.close()
        except SinkWriteError as close_exc:
            logger.warning("Ignoring close failure during error unwind: %s", close_exc)

    def open(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fp = open(self.path, "ab")
        except OSError as exc:
            raise SinkOpenError(
                f"cannot open output {self.path} for append: {exc.strerror or exc}",
                path=self.path,
            ) from exc

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #
    def write(self, data: bytes) -> None:
        if not self._fp:
            raise RuntimeError("TextFileSink not initialised")
        try:
            self._fp.write(data)
        except OSError as exc:
            raise SinkWriteError(
                f"error writing to {self.path}: {exc.strerror or exc}",
                path=self.path,
            ) from exc

    def flush(self) -> None:
        if not self._fp:
            return
        try:
            self._fp.flush()
        except OSError as exc:
            raise SinkWriteError(
                f"error flushing {self.path}: {exc.strerror or exc}",
                path=self.path,
            ) from exc

    def close(self) -> None:
        fp, self._fp = self._fp, None
        if fp is None:
            return
        try:
            fp.close()
        except OSError as exc:
            raise SinkWriteError(
                f"error closing {self.path}: {exc.strerror or exc}",
                path=self.path,
            ) from exc

    def __repr__(self) -> str:
        return f"<TextFileSink path='{self.path}'>"
