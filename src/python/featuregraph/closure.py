# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""Discover every features descriptor reachable through repository references.

Repository references may form cycles, so a traversal threads one visited set of coordinates
through every recursive call. A coordinate is added to it before its descriptor is loaded and
explored, and a coordinate already in it is never loaded again. The visited set belongs to the
caller: pass the same set to several calls to carry knowledge between them, or pass nothing to
start from scratch.
"""

from __future__ import annotations

import logging
from typing import Iterable, MutableSet

from typing_extensions import Protocol

from featuregraph.log import LogLevel
from featuregraph.model import Features, FeaturesSet
from featuregraph.ordered_set import OrderedSet

logger = logging.getLogger(__name__)


class FeaturesSource(Protocol):
    def read_feature_from_coord(self, coord: str) -> Features:
        ...


def find_all_features_recursively(
    loader: FeaturesSource,
    features: Features | Iterable[Features],
    existing_coords: MutableSet[str] | None = None,
) -> FeaturesSet:
    """Unmarshals all the features reachable from the given starting descriptors.

    The starting descriptors themselves are not part of the result, unless one is reached again
    through a repository reference.

    :param loader: Loads a descriptor given its coordinates.
    :param features: The starting descriptor, or descriptors.
    :param existing_coords: The coordinates of descriptors which have already been unmarshalled;
                            these are skipped, and every newly discovered coordinate is added.
                            Defaults to a fresh set, so that everything is discovered.
    :raises MalformedLocation: if a location is malformed.
    :raises NotFound: if a descriptor file is missing.
    :raises MalformedDescriptor: if a descriptor cannot be parsed.
    :raises UnresolvableCoordinate: if artifact coordinates can't be resolved.
    """
    if existing_coords is None:
        existing_coords = OrderedSet()
    starting = [features] if isinstance(features, Features) else list(features)

    result: OrderedSet[Features] = OrderedSet()
    for start in starting:
        _find_recursively(loader, start, existing_coords, result)
    return FeaturesSet(result)


def _find_recursively(
    loader: FeaturesSource,
    features: Features,
    existing_coords: MutableSet[str],
    result: OrderedSet[Features],
) -> None:
    logger.debug(f"find_all_features_recursively({features}) starts")
    LogLevel.TRACE.log(
        logger, f"find_all_features_recursively knows about these coords: {existing_coords}"
    )
    for coord in features.repository_coords():
        # Siblings explored earlier in this loop may have discovered `coord` already.
        if coord in existing_coords:
            LogLevel.TRACE.log(logger, f"find_all_features_recursively() skips known {coord}")
            continue
        LogLevel.TRACE.log(logger, f"find_all_features_recursively() going to add {coord}")
        existing_coords.add(coord)
        discovered = loader.read_feature_from_coord(coord)
        result.add(discovered)
        logger.debug(f"find_all_features_recursively() added {coord}")
        _find_recursively(loader, discovered, existing_coords, result)
