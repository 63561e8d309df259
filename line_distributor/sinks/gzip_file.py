"""
GzipFileSink - gzip-compressed append using isal (igzip).
"""
from __future__ import annotations

import io
from pathlib import Path

from isal.igzip import GzipFile  # type: ignore[import]

from ..config import DEFAULT_COMPRESSLEVEL
from ..errors import ConfigurationError, SinkOpenError, SinkWriteError
from ..logging_config import logger


class GzipFileSink:
    """
    Gzip-compressed append-mode sink.

    * Each run that writes data appends one new gzip member to the file, so
      an existing ``.gz`` stays readable and decompresses to old content +
      new content.
    * The member is started on the first ``write``; a sink that never
      receives data leaves the file byte-for-byte unchanged.
    * compresslevel defaults to 1 (fast). isal supports 0-3.
    * mtime=0 keeps the member header deterministic.
    """

    def __init__(
        self,
        path: Path,
        *,
        compresslevel: int = DEFAULT_COMPRESSLEVEL,
    ) -> None:
        if not 0 <= compresslevel <= 3:
            raise ConfigurationError(
                f"compresslevel must be between 0 and 3, got {compresslevel}")
        self.path = Path(path)
        self.compresslevel = compresslevel

        self._raw_fp: io.BufferedWriter | None = None
        self._gzip_fp: GzipFile | None = None

    # ------------------------------------------------------------------ #
    # Context-manager helpers                                            #
    # ------------------------------------------------------------------ #
    def __enter__(self) -> "GzipFileSink":
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
            self._raw_fp = open(self.path, "ab")
        except OSError as exc:
            raise SinkOpenError(
                f"cannot open output {self.path} for append: {exc.strerror or exc}",
                path=self.path,
            ) from exc

    def _start_member(self) -> GzipFile:
        assert self._raw_fp is not None
        # Raw binary file in append mode; the gzip member starts at EOF
        self._gzip_fp = GzipFile(
            fileobj=self._raw_fp,
            mode="wb",
            mtime=0,  # type: ignore[arg-type]
            compresslevel=self.compresslevel,  # type: ignore[call-arg]
        )
        return self._gzip_fp

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #
    def write(self, data: bytes) -> None:
        if not self._raw_fp:
            raise RuntimeError("GzipFileSink not initialised")
        try:
            gzip_fp = self._gzip_fp if self._gzip_fp is not None else self._start_member()
            gzip_fp.write(data)
        except OSError as exc:
            raise SinkWriteError(
                f"error writing to {self.path}: {exc.strerror or exc}",
                path=self.path,
            ) from exc

    def flush(self) -> None:
        # Only the raw file is flushed; a gzip sync flush per call would
        # bloat the output.
        if not self._raw_fp:
            return
        try:
            self._raw_fp.flush()
        except OSError as exc:
            raise SinkWriteError(
                f"error flushing {self.path}: {exc.strerror or exc}",
                path=self.path,
            ) from exc

    def close(self) -> None:
        gzip_fp, self._gzip_fp = self._gzip_fp, None
        raw_fp, self._raw_fp = self._raw_fp, None
        try:
            try:
                if gzip_fp:
                    gzip_fp.close()
            finally:
                if raw_fp:
                    raw_fp.close()
        except OSError as exc:
            raise SinkWriteError(
                f"error finishing gzip stream for {self.path}: {exc.strerror or exc}",
                path=self.path,
            ) from exc

    def __repr__(self) -> str:
        return f"<GzipFileSink path='{self.path}'>"
