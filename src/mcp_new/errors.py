"""Exception hierarchy for mcp-new.

Every error derives from :class:`McpNewError`, a ``click.ClickException``, so
anything that reaches the CLI is printed as ``Error: <message>`` and the
process exits with the class's ``exit_code``::

    McpNewError                 (exit 1)
    +-- SpecParseError          (exit 2)
    |   +-- UnresolvedReferenceError
    |   +-- CircularReferenceError
    +-- EmptySelectionError     (exit 3)
    +-- GenerationError         (exit 4)
"""

import click


class McpNewError(click.ClickException):
    """Base exception for all mcp-new errors."""

    exit_code = 1


class SpecParseError(McpNewError):
    """Raised when an API specification cannot be read or has the wrong shape."""

    exit_code = 2


class UnresolvedReferenceError(SpecParseError):
    """Raised when a ``$ref`` points at a path that does not exist in the document."""

    def __init__(self, ref: str, segment: str | None = None):
        detail = f" (missing '{segment}')" if segment else ""
        super().__init__(f"Could not resolve reference: {ref}{detail}")
        self.ref = ref


class CircularReferenceError(SpecParseError):
    """Raised when a chain of ``$ref`` pointers leads back to itself."""

    def __init__(self, ref: str, chain: list[str]):
        path = " -> ".join([*chain, ref])
        super().__init__(f"Circular reference detected: {path}")
        self.ref = ref
        self.chain = chain


class EmptySelectionError(McpNewError):
    """Raised when spec-driven generation ends up with no endpoints."""

    exit_code = 3


class GenerationError(McpNewError):
    """Raised when a project or tool file cannot be generated."""

    exit_code = 4
