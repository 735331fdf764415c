# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

from featuregraph.errors import InvalidCoordinateString, MalformedLocation
from featuregraph.log import LogLevel
from featuregraph.ordered_set import FrozenOrderedSet

logger = logging.getLogger(__name__)

WRAP_PREFIX = "wrap:"
MVN_PREFIX = "mvn:"
REPOSITORY_SEPARATOR = "!"
ARTIFACT_SEPARATOR = "/"
VERSION_LATEST = "LATEST"

# Everything from a property-substitution marker onwards, e.g. `1.0$Bundle-Version=1.0`.
_VERSION_STRIP_PATTERN = re.compile(r"\$.*$")

# Maven types whose files do not carry the type name as their extension.
_TYPE_EXTENSIONS = {
    "bundle": "jar",
    "maven-plugin": "jar",
    "test-jar": "jar",
}


@dataclass(frozen=True)
class MavenUrl:
    """The parts of an `mvn:` URL.

    The accepted syntax is

        mvn:[repository-url!]group/artifact[/version[/type[/classifier]]]

    where blank optional segments count as absent and `version` defaults to `LATEST`.
    """

    group: str
    artifact: str
    version: str = VERSION_LATEST
    type: str | None = None
    classifier: str | None = None
    repository: str | None = None

    @classmethod
    def parse(cls, location: str) -> MavenUrl:
        """Parses a location, optionally wrapped in `wrap:`, into its Maven parts.

        :raises MalformedLocation: if the location is not a Maven-style URL.
        """
        path = location[len(WRAP_PREFIX) :] if location.startswith(WRAP_PREFIX) else location
        if not path.startswith(MVN_PREFIX):
            raise MalformedLocation(location, f"expected a `{MVN_PREFIX}` URL")
        path = path[len(MVN_PREFIX) :]

        repository = None
        if path.startswith(REPOSITORY_SEPARATOR) or path.endswith(REPOSITORY_SEPARATOR):
            raise MalformedLocation(
                location, f"path cannot start or end with `{REPOSITORY_SEPARATOR}`"
            )
        if REPOSITORY_SEPARATOR in path:
            repository, _, path = path.rpartition(REPOSITORY_SEPARATOR)

        segments = path.split(ARTIFACT_SEPARATOR)
        if len(segments) < 2:
            raise MalformedLocation(
                location, "expected at least `group/artifact` after the scheme"
            )

        def segment(index: int) -> str | None:
            if index < len(segments) and segments[index].strip():
                return segments[index]
            return None

        group = segment(0)
        if group is None:
            raise MalformedLocation(location, "the groupId is empty")
        artifact = segment(1)
        if artifact is None:
            raise MalformedLocation(location, "the artifactId is empty")

        return cls(
            group=group,
            artifact=artifact,
            version=segment(2) or VERSION_LATEST,
            type=segment(3),
            classifier=segment(4),
            repository=repository,
        )


@dataclass(frozen=True, order=True)
class ArtifactCoordinate:
    """A parsed view of a canonical coordinate string.

    The canonical form is `group:artifact[:type][:classifier]:version`, in which a classifier is
    always preceded by a type. `to_coord_str` reproduces the string `from_coord_str` was given.
    """

    REGEX = re.compile("([^: ]+):([^: ]+)(:([^: ]*)(:([^: ]+))?)?:([^: ]+)")

    group: str
    artifact: str
    version: str
    type: str | None = None
    classifier: str | None = None

    @classmethod
    def from_maven_url(cls, url: MavenUrl) -> ArtifactCoordinate:
        version = _VERSION_STRIP_PATTERN.sub("", url.version)
        return cls(
            group=url.group,
            artifact=url.artifact,
            version=version,
            type=_coordinate_type(url.type, url.classifier),
            classifier=url.classifier,
        )

    @classmethod
    def from_coord_str(cls, s: str) -> ArtifactCoordinate:
        parts = cls.REGEX.fullmatch(s)
        if parts is None:
            raise InvalidCoordinateString(s)
        return cls(
            group=parts.group(1),
            artifact=parts.group(2),
            type=parts.group(4) or None,
            classifier=parts.group(6),
            version=parts.group(7),
        )

    def to_coord_str(self) -> str:
        coord = f"{self.group}:{self.artifact}"
        if self.type is not None:
            coord += f":{self.type}"
        if self.classifier is not None:
            coord += f":{self.classifier}"
        return f"{coord}:{self.version}"

    @property
    def extension(self) -> str:
        packaging = self.type or "jar"
        return _TYPE_EXTENSIONS.get(packaging, packaging)

    def repository_path(self) -> str:
        """The path of this artifact relative to the root of a Maven-layout repository."""
        classifier_suffix = f"-{self.classifier}" if self.classifier else ""
        file_name = f"{self.artifact}-{self.version}{classifier_suffix}.{self.extension}"
        return "/".join((*self.group.split("."), self.artifact, self.version, file_name))


def _coordinate_type(type_: str | None, classifier: str | None) -> str | None:
    # `jar` is the default type, so it is only spelled out when a classifier follows it.
    if classifier is None:
        return None if type_ == "jar" else type_
    return type_ or "jar"


def to_coord(location: str) -> str:
    """Converts the given location to canonical artifact coordinates.

    :raises MalformedLocation: if the location is not a Maven-style URL.
    """
    coordinate = ArtifactCoordinate.from_maven_url(MavenUrl.parse(location))
    if not coordinate.version:
        raise MalformedLocation(location, "the version is empty once placeholders are stripped")
    coord = coordinate.to_coord_str()
    LogLevel.TRACE.log(logger, f"to_coord({location}) returns {coord}")
    return coord


def to_coords(locations: Iterable[str]) -> list[str]:
    """Converts each location in turn, keeping order and duplicates."""
    locations = tuple(locations)
    result = [to_coord(location) for location in locations]
    LogLevel.TRACE.log(logger, f"to_coords({locations}) returns {result}")
    return result


def mvn_urls_to_coords(locations: Iterable[str]) -> FrozenOrderedSet[str]:
    """Converts the given locations to a de-duplicated set of coordinates in first-seen order."""
    locations = tuple(locations)
    result = FrozenOrderedSet(to_coord(location) for location in locations)
    LogLevel.TRACE.log(logger, f"mvn_urls_to_coords({locations}) returns {result}")
    return result
