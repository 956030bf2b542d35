"""WADL document parser.

Parses WADL 2009/02 XML files into WadlDocument models. Documents without
the WADL namespace are accepted too.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from pydantic import ValidationError

from wadl_segment.errors import InvalidDescriptorError
from .base import Param, ParamStyle, Resource, ResourceType, WadlDocument

logger = logging.getLogger(__name__)


def parse_wadl(file_path: Path) -> WadlDocument:
    """Parse a WADL file into a WadlDocument identified by its file URI."""
    text = file_path.read_text(encoding="utf-8")
    return parse_wadl_text(text, uri=file_path.resolve().as_uri())


def parse_wadl_text(text: str, uri: str) -> WadlDocument:
    """Parse WADL XML held in a string."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise InvalidDescriptorError(f"Malformed WADL document: {e}", file=uri) from e

    if _local(root.tag) != "application":
        raise InvalidDescriptorError(
            f"Expected an application root element, found {_local(root.tag)!r}", file=uri
        )

    base = ""
    resources: list[Resource] = []
    resource_types: list[ResourceType] = []
    params: list[Param] = []

    try:
        for child in root:
            tag = _local(child.tag)
            if tag == "resources":
                base = child.get("base", "")
                resources.extend(
                    _parse_resource(r, uri) for r in _children(child, "resource")
                )
            elif tag == "resource_type":
                resource_types.append(_parse_resource_type(child, uri))
            elif tag == "param":
                params.append(_parse_param(child, uri))

        doc = WadlDocument(
            uri=uri,
            base=base,
            resources=tuple(resources),
            resource_types=tuple(resource_types),
            params=tuple(params),
        )
    except ValidationError as e:
        raise InvalidDescriptorError(f"Invalid WADL document: {e}", file=uri) from e

    logger.debug(
        "Parsed %s: %d resources, %d resource types, %d shared params",
        uri, len(doc.resources), len(doc.resource_types), len(doc.params),
    )
    return doc


def _parse_resource(elem: ET.Element, uri: str) -> Resource:
    return Resource(
        path=elem.get("path"),
        id=elem.get("id"),
        type=tuple(elem.get("type", "").split()),
        params=tuple(_parse_param(p, uri) for p in _children(elem, "param")),
        methods=_parse_methods(elem),
        resources=tuple(_parse_resource(r, uri) for r in _children(elem, "resource")),
    )


def _parse_resource_type(elem: ET.Element, uri: str) -> ResourceType:
    return ResourceType(
        id=elem.get("id", ""),
        params=tuple(_parse_param(p, uri) for p in _children(elem, "param")),
        methods=_parse_methods(elem),
        resources=tuple(_parse_resource(r, uri) for r in _children(elem, "resource")),
    )


def _parse_param(elem: ET.Element, uri: str) -> Param:
    style = elem.get("style")
    if style is not None:
        try:
            style = ParamStyle(style)
        except ValueError:
            raise InvalidDescriptorError(
                f"Unknown param style {style!r} on param {elem.get('name')!r}", file=uri
            ) from None

    return Param(
        name=elem.get("name", ""),
        style=style,
        required=_parse_bool(elem.get("required")),
        href=elem.get("href"),
        id=elem.get("id"),
        param_type=elem.get("type", "xs:string"),
        default=elem.get("default"),
    )


def _parse_methods(elem: ET.Element) -> tuple[str, ...]:
    return tuple(m.get("name") or m.get("href", "") for m in _children(elem, "method"))


def _parse_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    return value.strip().lower() in ("true", "1")


def _children(elem: ET.Element, name: str) -> list[ET.Element]:
    return [c for c in elem if _local(c.tag) == name]


def _local(tag) -> str:
    """Strip the namespace from an element tag."""
    if not isinstance(tag, str):
        return ""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag
