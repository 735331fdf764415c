# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import os
from pathlib import Path
from textwrap import dedent

import pytest

from featuregraph.config import FeatureGraphConfig
from featuregraph.errors import ConfigError
from featuregraph.log import LogLevel
from featuregraph.resolver import DEFAULT_REMOTE_REPOSITORIES


def test_defaults() -> None:
    config = FeatureGraphConfig.from_toml("")
    assert config == FeatureGraphConfig()
    assert config.local_repository == os.path.expanduser("~/.m2/repository")
    assert config.remote_repositories == DEFAULT_REMOTE_REPOSITORIES
    assert config.max_retries == 3
    assert config.timeout_secs == 10.0
    assert config.log_level == LogLevel.INFO


def test_load(tmp_path: Path) -> None:
    path = tmp_path / "featuregraph.toml"
    path.write_text(
        dedent(
            """\
            [maven]
            local_repository = "~/repo"
            remote_repositories = ["https://nexus.example/content/groups/public"]
            max_retries = 5
            timeout_secs = 30

            [logging]
            level = "TRACE"
            """
        )
    )
    config = FeatureGraphConfig.load(str(path))
    assert config == FeatureGraphConfig(
        local_repository=os.path.expanduser("~/repo"),
        remote_repositories=("https://nexus.example/content/groups/public",),
        max_retries=5,
        timeout_secs=30.0,
        log_level=LogLevel.TRACE,
    )


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="could not be read"):
        FeatureGraphConfig.load(str(tmp_path / "nope.toml"))


@pytest.mark.parametrize(
    "content,message",
    [
        ("[maven\n", "could not be parsed as TOML"),
        ("[resolver]\nx = 1\n", "Unknown sections"),
        ("maven = 1\n", "must be a table"),
        ("[maven]\nlocal_repo = 'x'\n", "Unknown keys in [maven]"),
        ("[logging]\nformat = 'x'\n", "Unknown keys in [logging]"),
        ("[maven]\nmax_retries = '3'\n", "`max_retries`"),
        ("[maven]\nmax_retries = true\n", "`max_retries`"),
        ("[maven]\nmax_retries = 0\n", "at least 1"),
        ("[maven]\nremote_repositories = 'https://x'\n", "`remote_repositories`"),
        ("[maven]\nremote_repositories = [1, 2]\n", "list of strings"),
        ("[logging]\nlevel = 'verbose'\n", "must be one of trace, debug, info, warn, error"),
    ],
)
def test_invalid_config(content: str, message: str) -> None:
    with pytest.raises(ConfigError) as exc:
        FeatureGraphConfig.from_toml(content, source="test.toml")
    assert message in str(exc.value)
