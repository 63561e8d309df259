from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence


@dataclass
class DistributionStats:
    """Counters for one distribution run."""
    num_sinks: int
    chunk_size: int

    lines_read: int = 0
    full_chunks: int = 0
    # lines in the trailing short chunk (0 when input ended on a boundary)
    partial_chunk_lines: int = 0
    final_cursor: int = 0
    elapsed: float = 0.0

    lines_per_sink: List[int] = field(default_factory=list)
    chunks_per_sink: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.lines_per_sink:
            self.lines_per_sink = [0] * self.num_sinks
        if not self.chunks_per_sink:
            self.chunks_per_sink = [0] * self.num_sinks

    def record_chunk(self, sink_index: int, n_lines: int, *, partial: bool) -> None:
        self.lines_per_sink[sink_index] += n_lines
        self.chunks_per_sink[sink_index] += 1
        if partial:
            self.partial_chunk_lines = n_lines
        else:
            self.full_chunks += 1

    @property
    def chunks_total(self) -> int:
        return self.full_chunks + (1 if self.partial_chunk_lines else 0)

    @property
    def lines_written(self) -> int:
        return sum(self.lines_per_sink)

    def summary(self, paths: Optional[Sequence[Path]] = None) -> str:
        rate = self.lines_read / self.elapsed if self.elapsed > 0 else 0.0
        out = [
            "=== Distribution summary ===",
            f"lines read:     {self.lines_read:,}",
            f"chunk size:     {self.chunk_size:,}",
            f"full chunks:    {self.full_chunks:,}",
            f"partial chunk:  {self.partial_chunk_lines:,} line(s)"
            if self.partial_chunk_lines else "partial chunk:  none",
            f"final cursor:   {self.final_cursor}",
            f"elapsed:        {self.elapsed:.3f}s  ({rate:,.1f} lines/s)",
            "",
            "per sink:",
        ]
        for i in range(self.num_sinks):
            name = str(paths[i]) if paths is not None and i < len(paths) else f"#{i}"
            out.append(
                f"  [{i}] {name}: lines={self.lines_per_sink[i]:,} "
                f"chunks={self.chunks_per_sink[i]:,}"
            )
        return "\n".join(out)
