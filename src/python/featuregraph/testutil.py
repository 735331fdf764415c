# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import os
from textwrap import dedent
from typing import Iterable, Mapping

from featuregraph.coordinate import ArtifactCoordinate
from featuregraph.errors import UnresolvableCoordinate

FEATURES_NAMESPACE = "http://karaf.apache.org/xmlns/features/v1.4.0"


def features_xml(
    name: str,
    repositories: Iterable[str] = (),
    features: Mapping[str, Iterable[str]] | None = None,
    configfiles: Mapping[str, Iterable[str]] | None = None,
) -> str:
    """Renders a features descriptor.

    `features` maps a feature name to its bundle locations, and `configfiles` maps a feature name
    to its configfile locations.
    """
    features = features or {}
    configfiles = configfiles or {}
    lines = [f'<features name="{name}" xmlns="{FEATURES_NAMESPACE}">']
    lines.extend(f"  <repository>{location}</repository>" for location in repositories)
    for feature_name in dict.fromkeys([*features, *configfiles]):
        lines.append(f'  <feature name="{feature_name}" version="1.0">')
        lines.extend(
            f"    <bundle>{location}</bundle>" for location in features.get(feature_name, ())
        )
        lines.extend(
            f'    <configfile finalname="etc/{feature_name}.cfg">{location}</configfile>'
            for location in configfiles.get(feature_name, ())
        )
        lines.append("  </feature>")
    lines.append("</features>")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + "\n".join(lines) + "\n"


def install_artifact(repository: str, coord: str, content: str | bytes) -> str:
    """Writes an artifact into a Maven-layout repository rooted at `repository`."""
    relpath = ArtifactCoordinate.from_coord_str(coord).repository_path()
    path = os.path.join(repository, *relpath.split("/"))
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as fp:
        fp.write(content.encode() if isinstance(content, str) else content)
    return path


class FakeResolver:
    """Resolves coordinates to pre-registered paths, counting each request."""

    def __init__(self, paths: Mapping[str, str] | None = None) -> None:
        self.paths = dict(paths or {})
        self.requests: list[str] = []

    def resolve(self, coord: str) -> str:
        self.requests.append(coord)
        try:
            return self.paths[coord]
        except KeyError:
            raise UnresolvableCoordinate(coord, "not registered with the fake resolver")


SAMPLE_FEATURES_XML = dedent(
    f"""\
    <?xml version="1.0" encoding="UTF-8"?>
    <features name="odl-sample-{{version}}" xmlns="{FEATURES_NAMESPACE}">
      <repository>mvn:org.example/sample-deps/{{version}}/xml/features</repository>
      <feature name="odl-sample-api" version="{{version}}">
        <feature>odl-sample-base</feature>
        <bundle start-level="80">mvn:org.example/sample-api/{{version}}</bundle>
        <bundle dependency="true">wrap:mvn:com.google.guava/guava/18.0$Bundle-Version=18.0</bundle>
        <configfile finalname="etc/sample.cfg" override="true">
          mvn:org.example/sample-config/{{version}}/cfg/config
        </configfile>
      </feature>
      <feature name="odl-sample-impl">
        <bundle>mvn:org.example/sample-impl/{{version}}</bundle>
      </feature>
    </features>
    """
)
