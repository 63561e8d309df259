from __future__ import annotations

from pathlib import Path
from typing import List


class MemorySink:
    """In-memory sink that records every chunk it receives."""

    def __init__(self, name: str) -> None:
        self.path = Path(name)
        self.writes: List[bytes] = []
        self.flushes = 0
        self.closed = False

    def __enter__(self) -> "MemorySink":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def write(self, data: bytes) -> None:
        self.writes.append(data)

    def flush(self) -> None:
        self.flushes += 1

    def close(self) -> None:
        self.closed = True

    def lines(self) -> List[str]:
        return b"".join(self.writes).decode("utf-8").splitlines()


class FailingSink(MemorySink):
    def write(self, data: bytes) -> None:
        raise OSError(5, "Input/output error")


def write_lines(path: Path, lines: List[str]) -> Path:
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    return path
