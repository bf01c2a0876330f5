"""Convert parsed endpoints into the tool model shared by every generation mode."""

import re

from mcp_new.errors import SpecParseError
from mcp_new.models import ToolConfig, ToolParameter
from mcp_new.naming import check_tool_name, sanitize_identifier

from .base import ParsedEndpoint

_TYPE_MAP = {
    "integer": "number",
    "number": "number",
    "boolean": "boolean",
    "array": "array",
    "object": "object",
}


def map_spec_type(spec_type: str | None) -> str:
    """Map a spec type string onto a tool parameter type; unknown types become 'string'."""
    return _TYPE_MAP.get((spec_type or "").lower(), "string")


def tool_name(endpoint: ParsedEndpoint) -> str:
    """Sanitized operationId, or ``{method}_{path_segments}`` when there is none.

    ``GET /users/{id}/posts`` -> ``get_users_posts``
    """
    if endpoint.operation_id:
        return sanitize_identifier(endpoint.operation_id)

    segments = [
        re.sub(r"[^a-zA-Z0-9]", "", segment)
        for segment in endpoint.path.split("/")
        if segment and not (segment.startswith("{") and segment.endswith("}"))
    ]
    return f"{endpoint.method.lower()}_{'_'.join(segments)}".lower()


def tool_description(endpoint: ParsedEndpoint) -> str:
    return endpoint.summary or endpoint.description or f"{endpoint.method.upper()} {endpoint.path}"


def endpoint_to_tool(endpoint: ParsedEndpoint, name: str | None = None) -> ToolConfig:
    return ToolConfig(
        name=name or tool_name(endpoint),
        description=tool_description(endpoint),
        parameters=[
            ToolParameter(
                name=p.name,
                type=map_spec_type(p.type),
                description=p.description,
                required=p.required,
            )
            for p in endpoint.parameters
        ],
    )


def endpoints_to_tools(endpoints: list[ParsedEndpoint]) -> list[ToolConfig]:
    """Normalize every endpoint; repeated names get a numeric suffix (``_2``, ``_3``).

    Raises SpecParseError naming the endpoint when its derived tool name is not
    a valid tool name (``1_list_users``, ``_internal``).
    """
    tools = []
    seen: dict[str, int] = {}
    for endpoint in endpoints:
        name = tool_name(endpoint)
        reason = check_tool_name(name)
        if reason:
            raise SpecParseError(
                f'{endpoint.method.upper()} {endpoint.path}: tool name "{name}" is invalid. {reason}'
            )
        seen[name] = seen.get(name, 0) + 1
        if seen[name] > 1:
            name = f"{name}_{seen[name]}"
        tools.append(endpoint_to_tool(endpoint, name))
    return tools
