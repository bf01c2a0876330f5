"""Load raw specification text into a Python document."""

import json
from typing import Any

import yaml

from mcp_new.errors import SpecParseError


def load_document(text: str, kind: str = "specification") -> dict[str, Any]:
    """Parse YAML or JSON text into a dict.

    JSON is tried as a fallback for documents YAML refuses (tab indentation,
    for example).
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        try:
            data = json.loads(text)
        except ValueError:
            raise SpecParseError(
                f"Failed to parse {kind}. Ensure it is valid YAML or JSON."
            ) from None

    if not isinstance(data, dict):
        raise SpecParseError(f"Failed to parse {kind}. Expected a YAML or JSON object at the top level.")
    return data
