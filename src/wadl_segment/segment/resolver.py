"""Reference resolution for ``<param href="..."/>`` declarations.

Definitions are registered per document and looked up by
``(document URI, fragment id)``. Documents that are referenced but not yet
registered can be fetched through an optional loader.
"""

import logging
from collections.abc import Callable
from urllib.parse import urldefrag, urljoin

from wadl_segment.errors import InvalidDescriptorError
from wadl_segment.parser.base import Param, Resource, ResourceType, WadlDocument

logger = logging.getLogger(__name__)

DocumentLoader = Callable[[str], WadlDocument | None]


def split_href(file: str, href: str) -> tuple[str, str]:
    """Split an href into the absolute document URI and the fragment id.

    An href with no document part (``#id``) refers to ``file`` itself.
    """
    doc_part, fragment = urldefrag(href)
    if not fragment:
        raise InvalidDescriptorError(
            f"Reference {href!r} has no fragment identifier", href=href, file=file
        )
    doc_uri = urljoin(file, doc_part) if doc_part else file
    return doc_uri, fragment


class ElementResolver:
    """Maps ``(document URI, id)`` keys to shared param definitions."""

    def __init__(self, loader: DocumentLoader | None = None):
        self.loader = loader
        self._params: dict[tuple[str, str], Param] = {}
        self._documents: set[str] = set()
        self._absent: set[str] = set()

    def add_document(self, doc: WadlDocument) -> None:
        """Register every param carrying an id in the document."""
        self._documents.add(doc.uri)
        for p in doc.params:
            self._register(doc.uri, p)
        for rt in doc.resource_types:
            self._register_container(doc.uri, rt)
        for r in doc.resources:
            self._register_container(doc.uri, r)

    def has_document(self, uri: str) -> bool:
        return uri in self._documents

    def resolve(self, file: str, href: str, param: Param) -> Param | None:
        """Resolve a param reference found in ``file``.

        Returns the registered definition itself, or None when the target
        document was deliberately left out by the loader.
        """
        seen: set[tuple[str, str]] = set()
        current_file, current_href = file, href
        while True:
            key = split_href(current_file, current_href)
            if key in seen:
                raise InvalidDescriptorError(
                    f"Circular param reference {href!r}", href=href, file=file
                )
            seen.add(key)

            doc_uri, fragment = key
            if not self._ensure_document(doc_uri):
                logger.warning("Skipping %r: document %s is not available", href, doc_uri)
                return None

            target = self._params.get(key)
            if target is None:
                raise InvalidDescriptorError(
                    f"Unable to resolve param reference {current_href!r} "
                    f"(from param {param.name or href!r})",
                    href=current_href,
                    file=current_file,
                )
            logger.debug("Resolved %s#%s to param %r", doc_uri, fragment, target.name)
            if not target.is_reference:
                return target
            current_file, current_href = doc_uri, target.href

    def _ensure_document(self, uri: str) -> bool:
        if uri in self._documents:
            return True
        if uri in self._absent:
            return False
        if self.loader is None:
            raise InvalidDescriptorError(f"Unknown WADL document {uri}", file=uri)

        doc = self.loader(uri)
        if doc is None:
            self._absent.add(uri)
            return False
        self.add_document(doc)
        if doc.uri != uri:
            # register under the URI the reference used as well
            self.add_document(doc.model_copy(update={"uri": uri}))
        return True

    def _register_container(self, uri: str, container: Resource | ResourceType) -> None:
        for p in container.params:
            self._register(uri, p)
        for child in container.resources:
            self._register_container(uri, child)

    def _register(self, uri: str, p: Param) -> None:
        if p.id:
            self._params[(uri, p.id)] = p
