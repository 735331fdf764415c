# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO, Callable, Iterable

from featuregraph.config import FeatureGraphConfig
from featuregraph.errors import NotFound
from featuregraph.features_xml import parse_features
from featuregraph.log import LogLevel, setup_logging
from featuregraph.model import Features, FeaturesSet
from featuregraph.resolver import ArtifactResolver, MavenRepositoryResolver

logger = logging.getLogger(__name__)

DescriptorParser = Callable[[str, BinaryIO], Features]


class FeaturesLoader:
    """Reads features descriptors from local files, or from artifacts fetched by coordinates."""

    def __init__(
        self, resolver: ArtifactResolver, parser: DescriptorParser = parse_features
    ) -> None:
        self._resolver = resolver
        self._parser = parser

    @classmethod
    def from_config(cls, config: FeatureGraphConfig) -> FeaturesLoader:
        """A loader backed by the configured Maven repositories, logging at the configured level."""
        setup_logging(config.log_level)
        return cls(
            MavenRepositoryResolver(
                config.local_repository,
                config.remote_repositories,
                max_retries=config.max_retries,
                timeout_secs=config.timeout_secs,
            )
        )

    def read_feature(self, path: str | os.PathLike[str]) -> Features:
        """Unmarshal the features in the given file.

        :raises NotFound: if the file is missing or cannot be read.
        :raises MalformedDescriptor: if the file is not a features descriptor.
        """
        path = os.fspath(path)
        try:
            stream = open(path, "rb")
        except OSError as e:
            raise NotFound(path, e.strerror or repr(e)) from e
        with stream:
            result = self._parser(_as_uri(path), stream)
        LogLevel.TRACE.log(
            logger, f"read_feature({path}) returns {result} without resolving first"
        )
        return result

    def read_features(self, paths: Iterable[str | os.PathLike[str]]) -> FeaturesSet:
        """Unmarshal the features in each of the given files."""
        return FeaturesSet(self.read_feature(path) for path in paths)

    def read_feature_from_coord(self, coord: str) -> Features:
        """Unmarshal the features in the artifact with the given coordinates.

        :raises UnresolvableCoordinate: if the coordinates can't be resolved.
        """
        result = self.read_feature(self._resolver.resolve(coord))
        LogLevel.TRACE.log(logger, f"read_feature_from_coord({coord}) returns {result}")
        return result


def _as_uri(path: str) -> str:
    return Path(os.path.abspath(path)).as_uri()
