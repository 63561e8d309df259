"""Public package exports for the :mod:`line_distributor` library."""

from __future__ import annotations

__version__ = "1.0.0"

from .config import DistributorConfig, resolve_output_paths  # noqa: E402
from .distributor import ChunkedRoundRobinDistributor  # noqa: E402
from .errors import (  # noqa: E402
    ConfigurationError,
    DistributorError,
    SinkOpenError,
    SinkWriteError,
    SourceReadError,
)
from .stats import DistributionStats  # noqa: E402

__all__ = [
    "__version__",
    "ChunkedRoundRobinDistributor",
    "DistributionStats",
    "DistributorConfig",
    "resolve_output_paths",
    "DistributorError",
    "ConfigurationError",
    "SourceReadError",
    "SinkOpenError",
    "SinkWriteError",
]
