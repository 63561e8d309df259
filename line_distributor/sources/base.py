from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator


class LineSource(ABC):
    """Abstract base for line sources."""

    name: str

    def __enter__(self) -> "LineSource":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @abstractmethod
    def lines(self) -> Iterator[str]:
        """
        Yield input lines in order, without their line terminators.
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release the underlying stream, if this source owns it."""
