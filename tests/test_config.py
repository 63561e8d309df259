from __future__ import annotations

import logging
from pathlib import Path

import pytest

from line_distributor.config import (
    DEFAULT_NUM_OUTPUTS,
    DistributorConfig,
    load_env_defaults,
    resolve_output_paths,
)
from line_distributor.errors import ConfigurationError


def test_template_uses_one_based_index() -> None:
    assert resolve_output_paths(count=3, template="output{}.txt") == [
        Path("output1.txt"),
        Path("output2.txt"),
        Path("output3.txt"),
    ]


def test_defaults_to_four_templated_outputs() -> None:
    paths = resolve_output_paths()
    assert len(paths) == DEFAULT_NUM_OUTPUTS
    assert paths[0] == Path("output1.txt")


def test_template_placeholder_may_appear_anywhere() -> None:
    assert resolve_output_paths(count=2, template="shards/{}/part-{}.gz") == [
        Path("shards/1/part-1.gz"),
        Path("shards/2/part-2.gz"),
    ]


def test_explicit_paths_keep_order() -> None:
    assert resolve_output_paths(paths=["b.txt", "a.txt"]) == [Path("b.txt"), Path("a.txt")]


def test_explicit_paths_define_count() -> None:
    assert len(resolve_output_paths(paths=["only.txt"])) == 1


@pytest.mark.parametrize("kwargs", [
    {"count": 0},
    {"count": -1},
    {"paths": []},
    {"count": 2, "paths": ["a"]},
])
def test_bad_output_shapes(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        resolve_output_paths(**kwargs)


def test_template_without_placeholder_warns(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="line-distributor")
    paths = resolve_output_paths(count=2, template="same.txt")
    assert paths == [Path("same.txt"), Path("same.txt")]
    assert "placeholder" in caplog.text
    assert "more than once" in caplog.text


@pytest.mark.parametrize("kwargs", [
    {"chunk_size": 0},
    {"compresslevel": 4},
    {"compresslevel": -1},
    {"status_interval": -1.0},
])
def test_config_validation(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        DistributorConfig(outputs=[Path("a")], **kwargs)


def test_config_requires_outputs() -> None:
    with pytest.raises(ConfigurationError):
        DistributorConfig(outputs=[])


def test_config_normalizes_paths() -> None:
    cfg = DistributorConfig(outputs=["a", "b"], input="in.txt")
    assert cfg.outputs == [Path("a"), Path("b")]
    assert cfg.input == Path("in.txt")
    assert cfg.num_outputs == 2


def test_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINE_DIST_NUM_OUTPUTS", "3")
    monkeypatch.setenv("LINE_DIST_OUTPUT_TEMPLATE", "part-{}.gz")
    monkeypatch.setenv("LINE_DIST_CHUNK_SIZE", "256")
    monkeypatch.setenv("LINE_DIST_COMPRESS", "yes")
    monkeypatch.setenv("LINE_DIST_COMPRESSLEVEL", "2")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    d = load_env_defaults()
    assert d.num_outputs == 3
    assert d.output_template == "part-{}.gz"
    assert d.chunk_size == 256
    assert d.compress is True
    assert d.compresslevel == 2
    assert d.log_level == "DEBUG"


@pytest.mark.parametrize("name,value", [
    ("LINE_DIST_CHUNK_SIZE", "many"),
    ("LINE_DIST_COMPRESS", "maybe"),
    ("LINE_DIST_STATUS_INTERVAL", "soon"),
])
def test_malformed_env_is_a_config_error(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError, match=name):
        load_env_defaults()
