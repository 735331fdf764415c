# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""The features descriptor model, and the coordinates each part of it references.

A `Features` descriptor lists repository locations (pointers to further descriptors) and a number
of `Feature`s, each of which lists bundle and configuration file locations. Every one of these
types is a `CoordinateSource`: it can report the normalized artifact coordinates it references.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from featuregraph.coordinate import mvn_urls_to_coords, to_coord
from featuregraph.log import LogLevel
from featuregraph.ordered_set import FrozenOrderedSet

logger = logging.getLogger(__name__)


class CoordinateSource(ABC):
    """Something that references artifacts by location."""

    @abstractmethod
    def coords(self) -> FrozenOrderedSet[str]:
        """The de-duplicated coordinates referenced, in first-seen order.

        :raises MalformedLocation: if any referenced location cannot be normalized.
        """


@dataclass(frozen=True)
class Bundle(CoordinateSource):
    location: str
    start_level: int | None = None
    dependency: bool = False

    def coords(self) -> FrozenOrderedSet[str]:
        return FrozenOrderedSet([to_coord(self.location)])


@dataclass(frozen=True)
class ConfigFile(CoordinateSource):
    location: str
    finalname: str | None = None
    override: bool = False

    def coords(self) -> FrozenOrderedSet[str]:
        return FrozenOrderedSet([to_coord(self.location)])


@dataclass(frozen=True)
class Feature(CoordinateSource):
    """A named unit of a descriptor, listing the bundles and configuration files it installs."""

    name: str
    version: str | None = None
    bundles: tuple[Bundle, ...] = ()
    configfiles: tuple[ConfigFile, ...] = ()

    def coords(self) -> FrozenOrderedSet[str]:
        """The coordinates of this feature's bundles followed by those of its configfiles."""
        result = bundles_to_coords(self.bundles).union(configfiles_to_coords(self.configfiles))
        LogLevel.TRACE.log(logger, f"Feature({self.name}).coords() returns {result}")
        return result


@dataclass(frozen=True)
class Features(CoordinateSource):
    """A parsed features descriptor."""

    name: str | None = None
    uri: str | None = None
    repositories: tuple[str, ...] = ()
    features: tuple[Feature, ...] = ()

    def repository_coords(self) -> FrozenOrderedSet[str]:
        """The coordinates of the descriptors this one points at."""
        return mvn_urls_to_coords(self.repositories)

    def coords(self) -> FrozenOrderedSet[str]:
        """Every coordinate this descriptor references directly.

        That is its repositories, then the bundles and configfiles of each of its features. The
        referenced repositories are not loaded.
        """
        result = self.repository_coords().union(*(feature.coords() for feature in self.features))
        LogLevel.TRACE.log(logger, f"Features({self.name}).coords() returns {result}")
        return result

    def __str__(self) -> str:
        return self.name or self.uri or "<unnamed features>"


class FeaturesSet(FrozenOrderedSet[Features], CoordinateSource):
    """An ordered, de-duplicated collection of descriptors."""

    def repository_coords(self) -> FrozenOrderedSet[str]:
        return FrozenOrderedSet().union(*(features.repository_coords() for features in self))

    def coords(self) -> FrozenOrderedSet[str]:
        return FrozenOrderedSet().union(*(features.coords() for features in self))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({[str(features) for features in self]})"


def bundles_to_coords(bundles: Iterable[Bundle]) -> FrozenOrderedSet[str]:
    return mvn_urls_to_coords(bundle.location for bundle in bundles)


def configfiles_to_coords(configfiles: Iterable[ConfigFile]) -> FrozenOrderedSet[str]:
    return mvn_urls_to_coords(configfile.location for configfile in configfiles)


def feature_to_coords(feature: Feature) -> FrozenOrderedSet[str]:
    return feature.coords()


def features_to_coords(features: Features | Iterable[Features]) -> FrozenOrderedSet[str]:
    """All the coordinates of one or more descriptors: repositories, bundles, configfiles."""
    return _as_features_set(features).coords()


def features_repository_to_coords(
    features: Features | Iterable[Features],
) -> FrozenOrderedSet[str]:
    """The repository coordinates of one or more descriptors."""
    return _as_features_set(features).repository_coords()


def _as_features_set(features: Features | Iterable[Features]) -> FeaturesSet:
    if isinstance(features, Features):
        return FeaturesSet([features])
    if isinstance(features, FeaturesSet):
        return features
    return FeaturesSet(features)
