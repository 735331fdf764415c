# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping

import toml

from featuregraph.errors import ConfigError
from featuregraph.log import LogLevel
from featuregraph.resolver import DEFAULT_REMOTE_REPOSITORIES

logger = logging.getLogger(__name__)

DEFAULT_LOCAL_REPOSITORY = "~/.m2/repository"


@dataclass(frozen=True)
class FeatureGraphConfig:
    """Settings for fetching descriptors, read from a TOML file.

    [maven]
    local_repository = "~/.m2/repository"
    remote_repositories = ["https://repo1.maven.org/maven2"]
    max_retries = 3
    timeout_secs = 10.0

    [logging]
    level = "info"
    """

    local_repository: str = os.path.expanduser(DEFAULT_LOCAL_REPOSITORY)
    remote_repositories: tuple[str, ...] = DEFAULT_REMOTE_REPOSITORIES
    max_retries: int = 3
    timeout_secs: float = 10.0
    log_level: LogLevel = LogLevel.INFO

    @classmethod
    def load(cls, path: str) -> FeatureGraphConfig:
        try:
            with open(path) as fp:
                content = fp.read()
        except OSError as e:
            raise ConfigError(f"Config file {path} could not be read: {e!r}") from e
        return cls.from_toml(content, source=path)

    @classmethod
    def from_toml(cls, content: str, *, source: str = "<string>") -> FeatureGraphConfig:
        try:
            values = toml.loads(content)
        except toml.TomlDecodeError as e:
            raise ConfigError(f"Config file {source} could not be parsed as TOML:\n  {e}") from e

        unknown_sections = sorted(set(values) - {"maven", "logging"})
        if unknown_sections:
            raise ConfigError(f"Unknown sections in {source}: {', '.join(unknown_sections)}")
        maven = _section(values, "maven", source)
        logging_section = _section(values, "logging", source)
        _check_keys(
            maven,
            "maven",
            {"local_repository", "remote_repositories", "max_retries", "timeout_secs"},
            source,
        )
        _check_keys(logging_section, "logging", {"level"}, source)

        local_repository = _typed(maven, "local_repository", str, source)
        remote_repositories = _typed(maven, "remote_repositories", list, source)
        if remote_repositories is not None and not all(
            isinstance(r, str) for r in remote_repositories
        ):
            raise ConfigError(f"[maven].remote_repositories in {source} must be a list of strings")
        max_retries = _typed(maven, "max_retries", int, source)
        if max_retries is not None and max_retries < 1:
            raise ConfigError(f"[maven].max_retries in {source} must be at least 1")
        timeout_secs = _typed(maven, "timeout_secs", (int, float), source)
        level = _typed(logging_section, "level", str, source)

        defaults = cls()
        try:
            log_level = LogLevel(level.lower()) if level is not None else defaults.log_level
        except ValueError:
            choices = ", ".join(member.value for member in LogLevel)
            raise ConfigError(
                f"[logging].level in {source} must be one of {choices}, got {level!r}"
            )
        config = cls(
            local_repository=(
                os.path.expanduser(local_repository)
                if local_repository is not None
                else defaults.local_repository
            ),
            remote_repositories=(
                tuple(remote_repositories)
                if remote_repositories is not None
                else defaults.remote_repositories
            ),
            max_retries=max_retries if max_retries is not None else defaults.max_retries,
            timeout_secs=(
                float(timeout_secs) if timeout_secs is not None else defaults.timeout_secs
            ),
            log_level=log_level,
        )
        logger.debug(f"Loaded {config} from {source}")
        return config


def _section(values: Mapping[str, Any], name: str, source: str) -> Mapping[str, Any]:
    section = values.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] in {source} must be a table")
    return section


def _check_keys(section: Mapping[str, Any], name: str, valid: set[str], source: str) -> None:
    unknown = sorted(set(section) - valid)
    if unknown:
        raise ConfigError(f"Unknown keys in [{name}] of {source}: {', '.join(unknown)}")


def _typed(section: Mapping[str, Any], key: str, expected_type, source: str) -> Any:
    value = section.get(key)
    # NB: `bool` is a subclass of `int`, but `max_retries = true` is not a number.
    if value is not None and (not isinstance(value, expected_type) or isinstance(value, bool)):
        raise ConfigError(f"`{key}` in {source} has the wrong type: {value!r}")
    return value
