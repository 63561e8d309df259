from __future__ import annotations

import pytest

from .helpers import MemorySink

ENV_VARS = (
    "LINE_DIST_NUM_OUTPUTS",
    "LINE_DIST_OUTPUT_TEMPLATE",
    "LINE_DIST_CHUNK_SIZE",
    "LINE_DIST_COMPRESS",
    "LINE_DIST_COMPRESSLEVEL",
    "LINE_DIST_STATUS_INTERVAL",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def memory_sinks():
    def _make(n: int):
        return [MemorySink(f"sink{i}") for i in range(n)]
    return _make
