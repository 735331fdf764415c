# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import pytest

from featuregraph.coordinate import (
    ArtifactCoordinate,
    MavenUrl,
    mvn_urls_to_coords,
    to_coord,
    to_coords,
)
from featuregraph.errors import InvalidCoordinateString, MalformedLocation


@pytest.mark.parametrize(
    "location,expected",
    [
        ("mvn:g/a/1.0", "g:a:1.0"),
        (
            "mvn:org.opendaylight.odlparent/odl-guava/3.1.0/xml/features",
            "org.opendaylight.odlparent:odl-guava:xml:features:3.1.0",
        ),
        ("mvn:g/a/1.0/zip", "g:a:zip:1.0"),
        ("mvn:g/a/1.0/jar", "g:a:1.0"),
        ("mvn:g/a/1.0/jar/tests", "g:a:jar:tests:1.0"),
        ("mvn:g/a/1.0//tests", "g:a:jar:tests:1.0"),
        ("mvn:g/a", "g:a:LATEST"),
        ("mvn:g/a//", "g:a:LATEST"),
        ("wrap:mvn:group/artifact/version$build123", "group:artifact:version"),
        (
            "wrap:mvn:com.google.guava/guava/18.0$Bundle-Version=18.0&overwrite=merge",
            "com.google.guava:guava:18.0",
        ),
        ("mvn:https://repo.example.org/maven2!g/a/1.0", "g:a:1.0"),
        ("mvn:g/a/1.0/jar/cls/ignored", "g:a:jar:cls:1.0"),
    ],
)
def test_to_coord(location: str, expected: str) -> None:
    assert to_coord(location) == expected


def test_to_coord_is_deterministic() -> None:
    location = "wrap:mvn:g/a/1.0/bundle/x$Bundle-Name=a"
    assert to_coord(location) == to_coord(location)


def test_wrap_is_only_stripped_as_a_prefix() -> None:
    with pytest.raises(MalformedLocation):
        to_coord("file:wrap:g/a/1.0")
    # A `wrap:` after the scheme is just part of the group.
    assert to_coord("mvn:wrap:g/a/1.0") == "wrap:g:a:1.0"


@pytest.mark.parametrize(
    "location",
    [
        "g/a/1.0",
        "file:/tmp/features.xml",
        "http://repo1.maven.org/maven2/g/a/1.0/a-1.0.jar",
        "wrap:file:/tmp/a.jar",
        "mvn:g",
        "mvn:/a/1.0",
        "mvn: /a/1.0",
        "mvn:g//1.0",
        "mvn:!g/a/1.0",
        "mvn:https://repo.example.org/maven2!",
        "mvn:g/a/$placeholder",
    ],
)
def test_to_coord_malformed(location: str) -> None:
    with pytest.raises(MalformedLocation) as exc:
        to_coord(location)
    assert exc.value.location == location
    assert location in str(exc.value)


def test_maven_url_parse() -> None:
    assert MavenUrl.parse("mvn:http://host/repo!g/a/2.0/xml/features") == MavenUrl(
        group="g",
        artifact="a",
        version="2.0",
        type="xml",
        classifier="features",
        repository="http://host/repo",
    )
    assert MavenUrl.parse("wrap:mvn:g/a") == MavenUrl(group="g", artifact="a")


def test_to_coords_keeps_duplicates_and_order() -> None:
    locations = ["mvn:g/b/1", "mvn:g/a/1", "mvn:g/b/1"]
    assert to_coords(locations) == ["g:b:1", "g:a:1", "g:b:1"]


def test_mvn_urls_to_coords_deduplicates_in_first_seen_order() -> None:
    locations = ["mvn:g/b/1", "mvn:g/a/1", "wrap:mvn:g/b/1$x", "mvn:g/c/1"]
    assert list(mvn_urls_to_coords(locations)) == ["g:b:1", "g:a:1", "g:c:1"]


def test_default_jar_type_names_the_same_artifact() -> None:
    locations = ["mvn:g/a/1.0", "mvn:g/a/1.0/jar", "wrap:mvn:g/a/1.0/jar"]
    assert list(mvn_urls_to_coords(locations)) == ["g:a:1.0"]


def test_mvn_urls_to_coords_fails_on_any_malformed_location() -> None:
    with pytest.raises(MalformedLocation):
        mvn_urls_to_coords(["mvn:g/a/1", "bogus"])


@pytest.mark.parametrize(
    "coord,expected",
    [
        ("g:a:1.0", ArtifactCoordinate("g", "a", "1.0")),
        ("g:a:xml:1.0", ArtifactCoordinate("g", "a", "1.0", type="xml")),
        (
            "g:a:xml:features:1.0",
            ArtifactCoordinate("g", "a", "1.0", type="xml", classifier="features"),
        ),
    ],
)
def test_coord_str_round_trip(coord: str, expected: ArtifactCoordinate) -> None:
    parsed = ArtifactCoordinate.from_coord_str(coord)
    assert parsed == expected
    assert parsed.to_coord_str() == coord


@pytest.mark.parametrize("coord", ["", "g", "g:a", "g:a:1.0 trailing", "g:a:b:c:d:1.0"])
def test_invalid_coord_str(coord: str) -> None:
    with pytest.raises(InvalidCoordinateString):
        ArtifactCoordinate.from_coord_str(coord)


@pytest.mark.parametrize(
    "coord,expected",
    [
        ("org.example:a:1.0", "org/example/a/1.0/a-1.0.jar"),
        ("org.example:a:bundle:1.0", "org/example/a/1.0/a-1.0.jar"),
        ("org.example:a:xml:features:1.0", "org/example/a/1.0/a-1.0-features.xml"),
        ("g:a:cfg:config:2.1", "g/a/2.1/a-2.1-config.cfg"),
    ],
)
def test_repository_path(coord: str, expected: str) -> None:
    assert ArtifactCoordinate.from_coord_str(coord).repository_path() == expected
