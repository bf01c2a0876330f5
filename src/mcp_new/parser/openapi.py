"""OpenAPI 3.x document parser.

Parses OpenAPI 3.x documents into ParsedEndpoint models.
"""

from typing import Any

from mcp_new.errors import SpecParseError

from .base import ParsedEndpoint, ParsedParameter
from .loader import load_document
from .resolver import resolve

METHODS = ("get", "post", "put", "delete", "patch", "options", "head")


def parse_openapi(text: str) -> list[ParsedEndpoint]:
    """Parse OpenAPI 3.x YAML/JSON text into a list of ParsedEndpoint."""
    return parse_openapi_document(load_document(text, "OpenAPI specification"))


def parse_openapi_document(doc: dict[str, Any]) -> list[ParsedEndpoint]:
    if not doc.get("openapi"):
        raise SpecParseError('Invalid OpenAPI specification. Missing "openapi" field.')

    endpoints = []
    for path, path_item in (doc.get("paths") or {}).items():
        path_item = resolve(path_item, doc)
        for method in METHODS:
            operation = path_item.get(method)
            if not operation:
                continue
            endpoints.append(_parse_operation(path, method, operation, doc))
    return endpoints


def _parse_operation(path: str, method: str, operation: dict, doc: dict) -> ParsedEndpoint:
    params = [_parse_parameter(p, doc) for p in operation.get("parameters") or []]

    body = operation.get("requestBody")
    if body:
        params.extend(_parse_request_body(resolve(body, doc), doc))

    return ParsedEndpoint(
        path=path,
        method=method.upper(),
        operation_id=operation.get("operationId") or "",
        summary=operation.get("summary") or "",
        description=operation.get("description") or "",
        parameters=params,
        tags=operation.get("tags") or [],
    )


def _parse_parameter(param: dict, doc: dict) -> ParsedParameter:
    param = resolve(param, doc)
    schema = resolve(param.get("schema") or {}, doc)
    return ParsedParameter(
        name=param["name"],
        location=param.get("in", "query"),
        type=schema.get("type") or "string",
        description=param.get("description") or "",
        required=bool(param.get("required", False)),
    )


def _parse_request_body(body: dict, doc: dict) -> list[ParsedParameter]:
    """Flatten the top-level properties of an application/json body schema.

    A property is required only when the body itself is required and the
    schema lists the property as required.
    """
    media = (body.get("content") or {}).get("application/json")
    if not media or not media.get("schema"):
        return []

    schema = resolve(media["schema"], doc)
    body_required = bool(body.get("required", False))
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
                required=body_required and name in required_names,
            )
        )
    return params
