from __future__ import annotations

from time import perf_counter
from typing import Iterable, List, Sequence

from .config import DEFAULT_CHUNK_SIZE, validate_chunk_size
from .errors import ConfigurationError, SinkWriteError, SourceReadError
from .logging_config import logger
from .sinks.base import LineSink
from .stats import DistributionStats

LINE_TERMINATOR = "\n"


class ChunkedRoundRobinDistributor:
    """
    Single-pass, sequential distribution loop:

        lines  →  buffer (up to chunk_size)  →  sinks[cursor]  →  cursor += 1 (mod N)

    * A full chunk is written to the current sink with one ``write`` call,
      then the cursor advances.
    * A trailing short chunk goes to the current sink and the cursor is NOT
      advanced afterwards.
    * The cursor persists across ``run`` calls on the same instance.
    * Any read or write failure is fatal; already written chunks stay put.
    """

    def __init__(
        self,
        sinks: Sequence[LineSink],
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        status_interval: float = 0.0,
        encoding: str = "utf-8",
    ) -> None:
        if not sinks:
            raise ConfigurationError("at least one output sink is required")
        validate_chunk_size(chunk_size)

        self.sinks: List[LineSink] = list(sinks)
        self.chunk_size = chunk_size
        self.status_interval = max(0.0, status_interval)
        self._encoding = encoding

        self._buffer: List[str] = []
        self._cursor = 0

        logger.debug(
            "ChunkedRoundRobinDistributor(sinks=%d, chunk_size=%d, status_interval=%.1f)",
            len(self.sinks),
            self.chunk_size,
            self.status_interval,
        )

    @property
    def cursor(self) -> int:
        """Index of the sink that receives the next chunk."""
        return self._cursor

    def _flush(self, stats: DistributionStats, *, advance: bool) -> None:
        sink = self.sinks[self._cursor]
        data = "".join(
            line + LINE_TERMINATOR for line in self._buffer).encode(self._encoding)
        try:
            sink.write(data)
        except OSError as exc:
            raise SinkWriteError(
                f"error writing to {sink.path}: {exc.strerror or exc}",
                path=sink.path,
            ) from exc

        stats.record_chunk(self._cursor, len(self._buffer), partial=not advance)
        logger.debug(
            "Wrote %s chunk of %d line(s) to sink %d (%s)",
            "full" if advance else "final partial",
            len(self._buffer),
            self._cursor,
            sink.path,
        )
        self._buffer.clear()
        if advance:
            self._cursor = (self._cursor + 1) % len(self.sinks)

    def run(self, lines: Iterable[str]) -> DistributionStats:
        """Distribute ``lines`` over the sinks and return run statistics."""
        start = perf_counter()
        stats = DistributionStats(
            num_sinks=len(self.sinks), chunk_size=self.chunk_size)
        last_status = start
        last_lines = 0

        it = iter(lines)
        while True:
            try:
                line = next(it)
            except StopIteration:
                break
            except OSError as exc:
                raise SourceReadError(
                    f"error reading input after line {stats.lines_read}: {exc}"
                ) from exc

            stats.lines_read += 1
            self._buffer.append(line)
            if len(self._buffer) < self.chunk_size:
                continue

            self._flush(stats, advance=True)

            if self.status_interval > 0:
                now = perf_counter()
                delta_t = now - last_status
                if delta_t >= self.status_interval:
                    logger.info(
                        "Distribution status: lines=%s chunks=%s cursor=%d  rate=%.1f/s",
                        f"{stats.lines_read:,}",
                        f"{stats.full_chunks:,}",
                        self._cursor,
                        (stats.lines_read - last_lines) / delta_t,
                    )
                    last_status, last_lines = now, stats.lines_read

        if self._buffer:
            self._flush(stats, advance=False)

        stats.final_cursor = self._cursor
        stats.elapsed = perf_counter() - start
        logger.info(
            "Done - distributed %s lines in %s chunk(s) across %d sink(s) in %.2fs",
            f"{stats.lines_read:,}",
            f"{stats.chunks_total:,}",
            len(self.sinks),
            stats.elapsed,
        )
        return stats
