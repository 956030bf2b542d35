"""Exception hierarchy shared by the loader, resolver, analyzer and CLI."""


class WadlSegmentError(Exception):
    """Base for all wadl-segment errors."""


class InvalidDescriptorError(WadlSegmentError):
    """Raised when a WADL document cannot be processed.

    Covers malformed XML, unknown parameter styles and param references
    that cannot be resolved to a definition.
    """

    def __init__(self, message: str, href: str | None = None, file: str | None = None):
        super().__init__(message)
        self.href = href
        self.file = file


class MissingParameterError(WadlSegmentError, ValueError):
    """A required template parameter has no value at render time."""

    label = "Template"

    def __init__(self, name: str):
        super().__init__(f"{self.label} parameter value missing: {name}")
        self.name = name


class MissingMatrixParameterError(MissingParameterError):
    """A required matrix parameter has no value at render time."""

    label = "Matrix"
