"""Identifier casing and name validation.

Tool names are snake_case by contract (``get_weather``). Generated code needs
them in other shapes:

  to_pascal_case("get_weather") -> "GetWeather"   (type names)
  to_camel_case("get_weather")  -> "getWeather"   (function names)
  to_kebab_case("get_weather")  -> "get-weather"  (TypeScript file names)
"""

import re

TOOL_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")
PROJECT_NAME_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")
PROJECT_NAME_MAX_LENGTH = 214
RESERVED_PROJECT_NAMES = frozenset({"node_modules", "favicon.ico", "npm", "npx"})


def to_pascal_case(name: str) -> str:
    """Split on ``_`` and capitalize the first letter of every segment."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


def to_camel_case(name: str) -> str:
    pascal = to_pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


def to_kebab_case(name: str) -> str:
    return name.replace("_", "-")


def sanitize_identifier(text: str) -> str:
    """Replace every non-alphanumeric run with one underscore and lowercase.

    ``"getUser-ById"`` -> ``"getuser_byid"``. Leading and trailing underscores
    are kept, so a result can still fail :func:`check_tool_name`.
    """
    return re.sub(r"_+", "_", re.sub(r"[^a-zA-Z0-9]", "_", text)).lower()


def slugify_display_name(text: str) -> str:
    """Turn a human display name into a snake_case identifier.

    ``"Get User (by id)"`` -> ``"get_user_by_id"``.
    """
    return re.sub(r"[^a-z0-9]+", "_", text.lower()).strip("_")


def check_tool_name(name: str) -> str | None:
    """Return the reason ``name`` is not a valid tool name, or None."""
    if not name or not name.strip():
        return "Tool name cannot be empty"
    if not TOOL_NAME_PATTERN.match(name):
        return (
            "Tool name must start with a lowercase letter and contain only "
            "lowercase letters, numbers, and underscores"
        )
    return None


def check_project_name(name: str) -> str | None:
    """Return the reason ``name`` is not a valid project name, or None."""
    if not name or not name.strip():
        return "Project name cannot be empty"
    if len(name) > PROJECT_NAME_MAX_LENGTH:
        return f"Project name must be at most {PROJECT_NAME_MAX_LENGTH} characters"
    if not PROJECT_NAME_PATTERN.match(name):
        return (
            "Project name must start and end with a lowercase letter or number, "
            "and contain only lowercase letters, numbers, and hyphens"
        )
    if name.lower() in RESERVED_PROJECT_NAMES:
        return f'"{name}" is a reserved name'
    return None
