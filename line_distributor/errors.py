"""Error taxonomy for the line distributor.

Every failure is fatal to the run; nothing is retried. Each error keeps the
path it concerns (``None`` for stdin or pure configuration problems) so the
CLI can report it in one line.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class DistributorError(Exception):
    """Base class for all line-distributor failures."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class ConfigurationError(DistributorError):
    """Invalid configuration, detected before any I/O begins."""


class SourceReadError(DistributorError):
    """The input could not be opened, read, or decoded."""


class SinkOpenError(DistributorError):
    """An output destination could not be created or opened for append."""


class SinkWriteError(DistributorError):
    """Writing, flushing, or closing an output destination failed."""
