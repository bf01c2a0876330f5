"""Swagger 2.0 document parser.

Parses Swagger 2.x documents into ParsedEndpoint models. Parameter types are
passed through as written; mapping onto tool types happens in normalization.
"""

from typing import Any

from mcp_new.errors import SpecParseError

from .base import ParsedEndpoint, ParsedParameter
from .loader import load_document
from .resolver import resolve

METHODS = ("get", "post", "put", "delete", "patch")


def parse_swagger(text: str) -> list[ParsedEndpoint]:
    """Parse Swagger 2.x YAML/JSON text into a list of ParsedEndpoint."""
    return parse_swagger_document(load_document(text, "Swagger specification"))


def parse_swagger_document(doc: dict[str, Any]) -> list[ParsedEndpoint]:
    version = doc.get("swagger")
    if version is None or not str(version).startswith("2."):
        raise SpecParseError("Invalid Swagger specification. Expected swagger version 2.x")

    endpoints = []
    for path, path_item in (doc.get("paths") or {}).items():
        for method in METHODS:
            operation = path_item.get(method)
            if not operation:
                continue

            params: list[ParsedParameter] = []
            for p in operation.get("parameters") or []:
                p = resolve(p, doc)
                if p.get("in") == "body" and p.get("schema"):
                    params.extend(_parse_body_schema(p["schema"], doc))
                else:
                    params.append(
                        ParsedParameter(
                            name=p["name"],
                            location=p.get("in", "query"),
                            type=p.get("type") or "string",
                            description=p.get("description") or "",
                            required=bool(p.get("required", False)),
                        )
                    )

            endpoints.append(
                ParsedEndpoint(
                    path=path,
                    method=method.upper(),
                    operation_id=operation.get("operationId") or "",
                    summary=operation.get("summary") or "",
                    description=operation.get("description") or "",
                    parameters=params,
                    tags=operation.get("tags") or [],
                )
            )

    return endpoints


def _parse_body_schema(schema: dict, doc: dict) -> list[ParsedParameter]:
    """One parameter per body property, required by the schema's own list.

    The body parameter's own ``required`` flag is not applied to its fields.
    """
    schema = resolve(schema, doc)
    required_names = schema.get("required") or []

    params = []
    for name, prop in (schema.get("properties") or {}).items():
        prop = resolve(prop, doc)
        params.append(
            ParsedParameter(
                name=name,
                location="body",
                type=prop.get("type") or "string",
                description=prop.get("description") or "",
                required=name in required_names,
            )
        )
    return params
