# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

"""Parse features XML descriptors.

Only the parts of the format the traversal needs are read: repositories, and each feature's bundles
and configuration files. Elements are matched by local name, so any version of the features
namespace (or none at all) is accepted, and the document is not validated against a schema.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Iterator
from xml.dom.minidom import Element, parse
from xml.parsers.expat import ExpatError

from featuregraph.errors import MalformedDescriptor
from featuregraph.model import Bundle, ConfigFile, Feature, Features

logger = logging.getLogger(__name__)


def parse_features(source: str, stream: BinaryIO) -> Features:
    """Parse the features descriptor read from `stream`.

    :param source: Where the stream came from, recorded as the descriptor's `uri`.
    :raises MalformedDescriptor: if the content is not a features descriptor.
    """
    try:
        document = parse(stream)
    except ExpatError as e:
        raise MalformedDescriptor(source, f"{e!r}") from e
    root = document.documentElement
    if _local_name(root) != "features":
        raise MalformedDescriptor(
            source, f"expected a <features> root element, found <{root.tagName}>"
        )

    features = Features(
        name=root.getAttribute("name") or None,
        uri=source,
        repositories=tuple(_text(e, source) for e in _children(root, "repository")),
        features=tuple(_parse_feature(e, source) for e in _children(root, "feature")),
    )
    logger.debug(f"Parsed features {features} from {source}")
    return features


def _parse_feature(element: Element, source: str) -> Feature:
    name = element.getAttribute("name")
    if not name:
        raise MalformedDescriptor(source, "a <feature> is missing its `name` attribute")
    return Feature(
        name=name,
        version=element.getAttribute("version") or None,
        bundles=tuple(
            Bundle(
                location=_text(e, source),
                start_level=_int_attribute(e, "start-level", source),
                dependency=_bool_attribute(e, "dependency"),
            )
            for e in _children(element, "bundle")
        ),
        configfiles=tuple(
            ConfigFile(
                location=_text(e, source),
                finalname=e.getAttribute("finalname") or None,
                override=_bool_attribute(e, "override"),
            )
            for e in _children(element, "configfile")
        ),
    )


def _local_name(element: Element) -> str:
    return element.localName or element.tagName.rpartition(":")[2]


def _children(element: Element, name: str) -> Iterator[Element]:
    for node in element.childNodes:
        if node.nodeType == node.ELEMENT_NODE and _local_name(node) == name:
            yield node


def _text(element: Element, source: str) -> str:
    text = "".join(
        node.data
        for node in element.childNodes
        if node.nodeType in (node.TEXT_NODE, node.CDATA_SECTION_NODE)
    ).strip()
    if not text:
        raise MalformedDescriptor(source, f"a <{_local_name(element)}> element is empty")
    return text


def _int_attribute(element: Element, attribute: str, source: str) -> int | None:
    value = element.getAttribute(attribute).strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError as e:
        raise MalformedDescriptor(
            source, f"`{attribute}` must be an integer, got {value!r}"
        ) from e


def _bool_attribute(element: Element, attribute: str) -> bool:
    return element.getAttribute(attribute).strip().lower() == "true"
