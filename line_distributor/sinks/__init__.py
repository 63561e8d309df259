from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path
from typing import List, Sequence

from ..config import DEFAULT_COMPRESSLEVEL
from ..logging_config import logger
from .base import LineSink
from .gzip_file import GzipFileSink
from .text_file import TextFileSink

__all__ = ["LineSink", "TextFileSink", "GzipFileSink", "make_sink", "open_sinks"]


def make_sink(
    path: Path,
    *,
    compress: bool = False,
    compresslevel: int = DEFAULT_COMPRESSLEVEL,
) -> LineSink:
    """Pick the sink variant for ``path``; the choice is made once per run."""
    if compress:
        return GzipFileSink(path, compresslevel=compresslevel)
    return TextFileSink(path)


def open_sinks(
    paths: Sequence[Path],
    stack: ExitStack,
    *,
    compress: bool = False,
    compresslevel: int = DEFAULT_COMPRESSLEVEL,
) -> List[LineSink]:
    """
    Open every destination up front, in order.

    Each opened sink is registered on ``stack`` so it is flushed and closed
    when the stack unwinds, whether the run succeeds or fails. A failure to
    open sink k leaves sinks 0..k-1 registered for release.
    """
    sinks: List[LineSink] = []
    for path in paths:
        sink = make_sink(path, compress=compress, compresslevel=compresslevel)
        sinks.append(stack.enter_context(sink))
    logger.debug("Opened %d %s sink(s): %s", len(sinks),
                 "gzip" if compress else "plain",
                 ", ".join(str(s.path) for s in sinks))
    return sinks
