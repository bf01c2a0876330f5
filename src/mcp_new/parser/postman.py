"""Postman Collection v2.x parser.

Parses Postman exported JSON files into ParsedEndpoint models.
"""

import json
from urllib.parse import urlsplit

from mcp_new.errors import SpecParseError
from mcp_new.naming import slugify_display_name

from .base import ParsedEndpoint, ParsedParameter


def parse_postman(text: str) -> list[ParsedEndpoint]:
    """Parse a Postman Collection JSON string into a list of ParsedEndpoint."""
    try:
        collection = json.loads(text)
    except ValueError:
        raise SpecParseError("Failed to parse Postman collection. Ensure it is valid JSON.") from None
    if not isinstance(collection, dict):
        raise SpecParseError("Invalid Postman collection format.")
    return parse_postman_document(collection)


def parse_postman_document(collection: dict) -> list[ParsedEndpoint]:
    schema = (collection.get("info") or {}).get("schema") or ""
    if "postman" not in str(schema):
        raise SpecParseError("Invalid Postman collection format.")

    endpoints: list[ParsedEndpoint] = []
    _parse_items(collection.get("item") or [], endpoints)
    return endpoints


def _parse_items(items: list[dict], endpoints: list[ParsedEndpoint]) -> None:
    """Recursively parse items (supports folders)."""
    for item in items:
        if isinstance(item.get("item"), list):
            _parse_items(item["item"], endpoints)
        elif item.get("request"):
            endpoints.append(_parse_request(item))


def _parse_request(item: dict) -> ParsedEndpoint:
    req = item["request"]
    if isinstance(req, str):
        req = {"method": "GET", "url": req}

    name = item.get("name") or ""
    path, params = _parse_url(req.get("url"))
    params.extend(_parse_body(req.get("body")))

    return ParsedEndpoint(
        path=path,
        method=(req.get("method") or "GET").upper(),
        operation_id=slugify_display_name(name),
        summary=name,
        description=_description(req.get("description")),
        parameters=params,
    )


def _parse_url(url) -> tuple[str, list[ParsedParameter]]:
    if not url:
        return "/", []

    if isinstance(url, str):
        try:
            parts = urlsplit(url)
        except ValueError:
            return url, []
        if parts.scheme and parts.netloc:
            return parts.path or "/", []
        return url, []

    segments = [s if isinstance(s, str) else str(s.get("value", "")) for s in url.get("path") or []]
    path = "/" + "/".join(segments)

    params = [
        ParsedParameter(
            name=q["key"],
            location="query",
            type="string",
            description=_description(q.get("description")),
            required=False,
        )
        for q in url.get("query") or []
        if q.get("key") and not q.get("disabled")
    ]
    params.extend(
        ParsedParameter(
            name=v["key"],
            location="path",
            type="string",
            description=_description(v.get("description")),
            required=True,
        )
        for v in url.get("variable") or []
        if v.get("key")
    )
    return path, params


def _parse_body(body: dict | None) -> list[ParsedParameter]:
    if not body:
        return []

    mode = body.get("mode")
    if mode in ("urlencoded", "formdata"):
        return [
            ParsedParameter(
                name=entry["key"],
                location="body",
                type=entry.get("type") or "string",
                description=_description(entry.get("description")),
                required=False,
            )
            for entry in body.get(mode) or []
            if entry.get("key")
        ]

    if mode == "raw" and body.get("raw"):
        try:
            data = json.loads(body["raw"])
        except ValueError:
            # Raw bodies may be plain text or XML; nothing to extract.
            return []
        if isinstance(data, dict):
            return [
                ParsedParameter(name=key, location="body", type=_json_type(value), required=False)
                for key, value in data.items()
                if key
            ]
    return []


def _json_type(value) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return "string"


def _description(value) -> str:
    """Postman descriptions are either a string or ``{"content": ...}``."""
    if isinstance(value, dict):
        return str(value.get("content") or "")
    return value or ""
