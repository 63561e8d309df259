"""Configuration for a distribution run.

Both ways of naming the outputs (a count plus a name template, or an explicit
list of paths) are collapsed into one list of destination paths here, before
the distributor ever sees them.
"""

from __future__ import annotations

import os
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from .errors import ConfigurationError
from .logging_config import logger

DEFAULT_NUM_OUTPUTS = 4
DEFAULT_OUTPUT_TEMPLATE = "output{}.txt"
DEFAULT_CHUNK_SIZE = 1
DEFAULT_COMPRESSLEVEL = 1  # isal supports 0-3
TEMPLATE_PLACEHOLDER = "{}"

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


@dataclass
class EnvDefaults:
    """CLI defaults derived from environment variables (and ``.env``)."""
    num_outputs: int = DEFAULT_NUM_OUTPUTS
    output_template: str = DEFAULT_OUTPUT_TEMPLATE
    chunk_size: int = DEFAULT_CHUNK_SIZE
    compress: bool = False
    compresslevel: int = DEFAULT_COMPRESSLEVEL
    status_interval: float = 0.0
    log_level: str = "INFO"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be a number, got {raw!r}") from exc


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def load_env_defaults() -> EnvDefaults:
    """Load ``.env`` (if any) and read the ``LINE_DIST_*`` variables."""
    load_dotenv()
    return EnvDefaults(
        num_outputs=_env_int("LINE_DIST_NUM_OUTPUTS", DEFAULT_NUM_OUTPUTS),
        output_template=os.getenv(
            "LINE_DIST_OUTPUT_TEMPLATE", DEFAULT_OUTPUT_TEMPLATE),
        chunk_size=_env_int("LINE_DIST_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
        compress=_env_bool("LINE_DIST_COMPRESS", False),
        compresslevel=_env_int(
            "LINE_DIST_COMPRESSLEVEL", DEFAULT_COMPRESSLEVEL),
        status_interval=_env_float("LINE_DIST_STATUS_INTERVAL", 0.0),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def resolve_output_paths(
    *,
    count: Optional[int] = None,
    template: Optional[str] = None,
    paths: Optional[Sequence[str | Path]] = None,
) -> List[Path]:
    """
    Normalize either ``count`` + ``template`` or an explicit ``paths`` list
    into the ordered list of destinations.

    The template's ``{}`` is replaced by the 1-based destination index, so
    ``output{}.txt`` with ``count=3`` gives ``output1.txt`` .. ``output3.txt``.
    Colliding names are allowed but logged.
    """
    if paths is not None and count is not None:
        raise ConfigurationError(
            "give either an output count with a template or an explicit "
            "list of outputs, not both")

    if paths is not None:
        resolved = [Path(p) for p in paths]
        if not resolved:
            raise ConfigurationError("at least one output path is required")
    else:
        if count is None:
            count = DEFAULT_NUM_OUTPUTS
        if template is None:
            template = DEFAULT_OUTPUT_TEMPLATE
        if count < 1:
            raise ConfigurationError(
                f"number of output files must be at least 1, got {count}")
        if TEMPLATE_PLACEHOLDER not in template and count > 1:
            logger.warning(
                "Output template %r has no '%s' placeholder; all %d outputs "
                "share one name", template, TEMPLATE_PLACEHOLDER, count)
        resolved = [
            Path(template.replace(TEMPLATE_PLACEHOLDER, str(i)))
            for i in range(1, count + 1)
        ]

    dupes = [str(p) for p, n in Counter(resolved).items() if n > 1]
    if dupes:
        logger.warning("Output paths are listed more than once: %s",
                       ", ".join(dupes))
    return resolved


@dataclass
class DistributorConfig:
    """One normalized configuration for a distribution run."""
    outputs: List[Path]
    input: Optional[Path] = None  # None reads standard input
    chunk_size: int = DEFAULT_CHUNK_SIZE
    compress: bool = False
    compresslevel: int = DEFAULT_COMPRESSLEVEL
    status_interval: float = 0.0

    def __post_init__(self) -> None:
        self.outputs = [Path(p) for p in self.outputs]
        if self.input is not None:
            self.input = Path(self.input)
        validate_chunk_size(self.chunk_size)
        if not self.outputs:
            raise ConfigurationError("at least one output path is required")
        if not 0 <= self.compresslevel <= 3:
            raise ConfigurationError(
                f"compresslevel must be between 0 and 3, got {self.compresslevel}")
        if self.status_interval < 0:
            raise ConfigurationError(
                f"status interval must not be negative, got {self.status_interval}")

    @property
    def num_outputs(self) -> int:
        return len(self.outputs)


def validate_chunk_size(chunk_size: int) -> None:
    if chunk_size < 1:
        raise ConfigurationError(
            f"chunk size must be at least 1, got {chunk_size}")
