# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations


class FeatureGraphError(Exception):
    """Base class for every error raised while resolving feature descriptors."""


class MalformedLocation(FeatureGraphError):
    """A location cannot be parsed as a Maven-style URL."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"Malformed artifact location `{location}`: {reason}")
        self.location = location
        self.reason = reason


class InvalidCoordinateString(FeatureGraphError):
    """The coordinate string being passed is invalid or malformed."""

    def __init__(self, coords: str) -> None:
        super().__init__(f"Received invalid artifact coordinates: {coords}")
        self.coords = coords


class NotFound(FeatureGraphError):
    """A local descriptor source is missing or unreadable."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not read features descriptor at {path}: {reason}")
        self.path = path


class MalformedDescriptor(FeatureGraphError):
    """The content of a descriptor source is not a features descriptor."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Error parsing features descriptor {source}: {reason}")
        self.source = source


class UnresolvableCoordinate(FeatureGraphError):
    """An artifact coordinate cannot be fetched to a local file."""

    def __init__(self, coord: str, reason: str) -> None:
        super().__init__(f"Could not resolve artifact {coord}: {reason}")
        self.coord = coord


class ConfigError(FeatureGraphError):
    """The configuration file is unreadable or contains invalid entries."""
