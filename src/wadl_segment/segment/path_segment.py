"""Path segment templates with embedded parameters.

A path segment is the ``path`` attribute of a WADL resource, e.g.
``users/{id}``. Embedded parameters are written ``{name}`` or
``{name: regex}``. Besides the embedded ones a segment also carries the
matrix, query and header parameters declared on the resource.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict

from wadl_segment.errors import MissingMatrixParameterError, MissingParameterError
from wadl_segment.parser.base import Param, ParamStyle, Resource, ResourceType

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{.*?\}")


class Resolver(Protocol):
    def resolve(self, file: str, href: str, param: Param) -> Param | None: ...


def placeholder_name(placeholder: str) -> str:
    """Name of a ``{name}`` or ``{name: regex}`` placeholder.

    >>> placeholder_name("{id: [0-9]+}")
    'id'
    """
    inner = placeholder[1:-1]
    return inner.split(":", 1)[0].strip()


def find_placeholders(template: str) -> list[str]:
    """Placeholder names in order of appearance, repeats included."""
    return [placeholder_name(m.group()) for m in PLACEHOLDER_PATTERN.finditer(template)]


def deref_if_required(param: Param, file: str, resolver: Resolver) -> Param | None:
    """Return the definition a param reference points at, or the param itself."""
    if param.href:
        return resolver.resolve(file, param.href, param)
    return param


class PathSegment(BaseModel):
    """A URI path segment template plus the parameters attached to it.

    ``template_parameters`` has one entry per placeholder occurrence, so a
    template of ``{p1}/xyzzy/{p2}`` yields ``p1`` and ``p2`` in that order.
    """

    model_config = ConfigDict(frozen=True)

    template: str | None = None
    template_parameters: tuple[Param, ...] = ()
    matrix_parameters: tuple[Param, ...] = ()
    query_parameters: tuple[Param, ...] = ()
    header_parameters: tuple[Param, ...] = ()

    @classmethod
    def from_template(
        cls, template: str, matrix_parameters: Iterable[str] | None = None
    ) -> "PathSegment":
        """Build a segment from a bare template string.

        Every embedded parameter becomes an undeclared, optional param;
        ``matrix_parameters`` names are attached as optional matrix params.
        """
        return cls(
            template=template,
            template_parameters=tuple(Param.implicit(n) for n in find_placeholders(template)),
            matrix_parameters=tuple(
                Param.implicit(n, style=ParamStyle.MATRIX) for n in matrix_parameters or ()
            ),
        )

    @classmethod
    def from_resource(cls, resource: Resource, file: str, resolver: Resolver) -> "PathSegment":
        """Build a segment from a WADL resource element found in ``file``."""
        return cls.analyze(resource.path, resource.params, file, resolver)

    @classmethod
    def from_resource_type(
        cls, resource_type: ResourceType, file: str, resolver: Resolver
    ) -> "PathSegment":
        """Build a segment from a resource type.

        Resource types have no path, so only the matrix, query and header
        params are kept.
        """
        buckets = _bucket(resource_type.params, file, resolver)
        dropped = buckets.pop(ParamStyle.TEMPLATE)
        if dropped:
            logger.debug(
                "Ignoring template params %s on resource type %r",
                [p.name for p in dropped], resource_type.id,
            )
        return cls(
            template=None,
            matrix_parameters=tuple(buckets[ParamStyle.MATRIX]),
            query_parameters=tuple(buckets[ParamStyle.QUERY]),
            header_parameters=tuple(buckets[ParamStyle.HEADER]),
        )

    @classmethod
    def analyze(
        cls,
        template: str | None,
        params: Iterable[Param],
        file: str,
        resolver: Resolver,
    ) -> "PathSegment":
        """Bind a template's placeholders to declared params.

        Params are dereferenced and bucketed by style first. Each
        placeholder then takes the template-style declaration of the same
        name (the last one wins) or, failing that, a fresh implicit param.
        """
        template = template or ""
        buckets = _bucket(params, file, resolver)
        declared = {p.name: p for p in buckets[ParamStyle.TEMPLATE]}

        template_parameters = []
        for name in find_placeholders(template):
            param = declared.get(name)
            if param is None:
                logger.debug("No declaration for {%s} in %r, adding implicit param", name, template)
                param = Param.implicit(name)
            template_parameters.append(param)

        return cls(
            template=template,
            template_parameters=tuple(template_parameters),
            matrix_parameters=tuple(buckets[ParamStyle.MATRIX]),
            query_parameters=tuple(buckets[ParamStyle.QUERY]),
            header_parameters=tuple(buckets[ParamStyle.HEADER]),
        )

    def evaluate(self, values: Mapping[str, Any] | None = None) -> str:
        """Merge parameter values into the template.

        E.g. template ``{p1}/{p2}`` with matrix param ``p3`` and values
        ``v1``, ``v2``, ``v3`` gives ``v1/v2;p3=v3``. Query and header params
        are ignored. A value of None counts as missing.

        Raises MissingParameterError / MissingMatrixParameterError when a
        required param has no value.
        """
        values = values or {}

        substitutions: dict[str, str] = {}
        for param in self.template_parameters:
            value = values.get(param.name)
            if value is None:
                if param.required is True:
                    raise MissingParameterError(param.name)
                substitutions[param.name] = ""
            else:
                substitutions[param.name] = _stringify(value)

        result = PLACEHOLDER_PATTERN.sub(
            lambda m: substitutions.get(placeholder_name(m.group()), m.group()),
            self.template or "",
        )

        parts = [result]
        for param in self.matrix_parameters:
            value = values.get(param.name)
            if value is None:
                if param.required is True:
                    raise MissingMatrixParameterError(param.name)
                continue
            if isinstance(value, bool):
                if value:
                    parts.append(f";{param.name}")
            else:
                parts.append(f";{param.name}={value}")
        return "".join(parts)


def _bucket(
    params: Iterable[Param], file: str, resolver: Resolver
) -> dict[ParamStyle, list[Param]]:
    """Dereference params and group them by style, keeping declaration order."""
    buckets: dict[ParamStyle, list[Param]] = {style: [] for style in ParamStyle}
    for p in params:
        resolved = deref_if_required(p, file, resolver)
        if resolved is None:
            logger.debug("Skipping unresolved param reference %r in %s", p.href, file)
            continue
        buckets[resolved.effective_style].append(resolved)
    return buckets


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
