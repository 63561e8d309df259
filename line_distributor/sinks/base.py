from __future__ import annotations

from pathlib import Path
from types import TracebackType
from typing import Optional, Protocol, Type, runtime_checkable


@runtime_checkable
class LineSink(Protocol):
    """
    Minimal protocol for an append-only output destination.

    Implementations must be context managers; ``write`` receives one whole
    encoded chunk at a time.
    """

    path: Path

    def __enter__(self) -> "LineSink": ...

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None: ...
    def write(self, data: bytes) -> None: ...
    def flush(self) -> None: ...
    def close(self) -> None: ...
