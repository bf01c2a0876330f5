"""Resolve ``$ref`` pointers inside a parsed specification.

Handles OpenAPI (``#/components/schemas/Pet``) and Swagger
(``#/definitions/Pet``) style internal references. A reference whose target
is itself a reference is followed until a concrete node is reached; a chain
that comes back to a reference it already visited raises
:class:`~mcp_new.errors.CircularReferenceError`.
"""

from typing import Any

from mcp_new.errors import CircularReferenceError, SpecParseError, UnresolvedReferenceError


def is_ref(node: Any) -> bool:
    return isinstance(node, dict) and isinstance(node.get("$ref"), str)


def resolve(node: Any, root: dict[str, Any]) -> Any:
    """Return ``node`` with any ``$ref`` indirection followed to its target.

    Non-reference nodes are returned unchanged.
    """
    chain: list[str] = []
    while is_ref(node):
        ref = node["$ref"]
        if ref in chain:
            raise CircularReferenceError(ref, chain)
        chain.append(ref)
        node = lookup(ref, root)
    return node


def lookup(ref: str, root: dict[str, Any]) -> Any:
    """Walk ``root`` along the JSON pointer in ``ref``."""
    if not ref.startswith("#/"):
        raise SpecParseError(
            f"External reference not supported: {ref}. Only internal references (#/...) are handled."
        )

    current: Any = root
    for segment in ref[2:].split("/"):
        # RFC 6901 escaping
        segment = segment.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit() and int(segment) < len(current):
            current = current[int(segment)]
        else:
            raise UnresolvedReferenceError(ref, segment)
    return current
