"""Data models for parsed WADL documents.

The loader converts WADL XML into these models; the path segment analyzer
and the reference resolver consume them. All models are frozen and use
tuples for their collections so they can be shared read-only.
"""

from collections.abc import Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict


class ParamStyle(str, Enum):
    """How a parameter is carried in a request."""

    TEMPLATE = "template"
    MATRIX = "matrix"
    QUERY = "query"
    HEADER = "header"


class Param(BaseModel):
    """A single WADL parameter declaration, or a reference to one."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    style: ParamStyle | None = None
    required: bool | None = None
    href: str | None = None
    id: str | None = None
    param_type: str = "xs:string"
    default: str | None = None
    synthetic: bool = False  # made up for a placeholder with no declaration

    @classmethod
    def implicit(cls, name: str, style: ParamStyle | None = None) -> "Param":
        """Build an undeclared, optional parameter carrying only a name."""
        return cls(name=name, style=style, synthetic=True)

    @property
    def effective_style(self) -> ParamStyle:
        return self.style or ParamStyle.TEMPLATE

    @property
    def is_reference(self) -> bool:
        return bool(self.href)


class ResourceType(BaseModel):
    """A reusable bundle of parameters and methods (``resource_type``)."""

    model_config = ConfigDict(frozen=True)

    id: str
    params: tuple[Param, ...] = ()
    methods: tuple[str, ...] = ()
    resources: tuple["Resource", ...] = ()


class Resource(BaseModel):
    """A WADL ``resource`` element and its nested children."""

    model_config = ConfigDict(frozen=True)

    path: str | None = None
    id: str | None = None
    type: tuple[str, ...] = ()  # resource_type references
    params: tuple[Param, ...] = ()
    methods: tuple[str, ...] = ()  # method names, or hrefs for method references
    resources: tuple["Resource", ...] = ()


class WadlDocument(BaseModel):
    """A loaded WADL application."""

    model_config = ConfigDict(frozen=True)

    uri: str  # document identity, scopes param references
    base: str = ""
    resources: tuple[Resource, ...] = ()
    resource_types: tuple[ResourceType, ...] = ()
    params: tuple[Param, ...] = ()  # top-level shared definitions

    def iter_resources(self) -> Iterator[tuple[str, Resource]]:
        """Walk resources depth-first, yielding ``(full_path, resource)``."""
        for resource in self.resources:
            yield from _walk(resource, "")

    def find_resource(self, target: str) -> Resource | None:
        """Look a resource up by id, then by its own path, then by full path."""
        walked = list(self.iter_resources())
        for _, resource in walked:
            if resource.id == target:
                return resource
        for _, resource in walked:
            if resource.path == target:
                return resource
        for full_path, resource in walked:
            if full_path.strip("/") == target.strip("/"):
                return resource
        return None


def _walk(resource: Resource, prefix: str) -> Iterator[tuple[str, Resource]]:
    full_path = _join(prefix, resource.path or "")
    yield full_path, resource
    for child in resource.resources:
        yield from _walk(child, full_path)


def _join(prefix: str, path: str) -> str:
    if not prefix:
        return path
    if not path:
        return prefix
    return prefix.rstrip("/") + "/" + path.lstrip("/")


Resource.model_rebuild()
ResourceType.model_rebuild()
