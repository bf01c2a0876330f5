"""Auto-detect the specification format and dispatch to its parser."""

from pathlib import Path

from mcp_new.errors import SpecParseError

from .base import ParsedEndpoint
from .loader import load_document
from .openapi import parse_openapi_document
from .postman import parse_postman_document
from .swagger import parse_swagger_document

PARSERS = {
    "openapi": parse_openapi_document,
    "swagger": parse_swagger_document,
    "postman": parse_postman_document,
}


def detect_format(doc: dict) -> str:
    """Detect the format of a loaded specification document.

    Returns: 'openapi', 'swagger', or 'postman'.
    """
    if "openapi" in doc:
        return "openapi"
    if "swagger" in doc:
        return "swagger"
    info = doc.get("info")
    if isinstance(info, dict) and "postman" in str(info.get("schema") or ""):
        return "postman"
    raise SpecParseError(
        'Unrecognized specification format. Expected an "openapi" or "swagger" field, '
        "or a Postman collection info.schema."
    )


def parse_spec(text: str) -> list[ParsedEndpoint]:
    """Parse OpenAPI, Swagger or Postman text into endpoints, whichever it is."""
    doc = load_document(text)
    return PARSERS[detect_format(doc)](doc)


def parse_spec_file(file_path: Path) -> list[ParsedEndpoint]:
    return parse_spec(file_path.read_text(encoding="utf-8"))
