"""Per-language tool emission.

Renders one ``ToolConfig`` into a source file for a target language: an input
type declaration, the tool's JSON schema literal, a placeholder handler and,
separately, the manual wiring steps. All four languages share one renderer;
what differs lives in the :class:`~mcp_new.generator.languages.Language`
descriptor and its template.
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jinja2

from mcp_new.generator.languages import Language
from mcp_new.models import ToolConfig
from mcp_new.naming import to_pascal_case

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


@dataclass(frozen=True)
class EmittedTool:
    """A rendered tool file plus the advisory steps for wiring it in."""

    path: str  # relative to the project root
    content: str
    next_steps: tuple[str, ...]


def _clean(value: Any) -> Any:
    """Drop control characters that not every target language can escape."""
    if isinstance(value, str):
        return _CONTROL_CHARS.sub("", value)
    if isinstance(value, dict):
        return {_clean(k): _clean(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_clean(v) for v in value]
    return value


def quote(value: str) -> str:
    """Double-quoted string literal valid in TypeScript, Python, Go and Rust."""
    return json.dumps(_clean(value), ensure_ascii=False)


def json_literal(value: Any, indent: int = 0) -> str:
    """Pretty JSON, with continuation lines shifted right by ``indent`` spaces."""
    text = json.dumps(_clean(value), indent=2, ensure_ascii=False)
    return text.replace("\n", "\n" + " " * indent)


def oneline(value: str) -> str:
    return " ".join(value.split())


def comment(value: str) -> str:
    return oneline(value).replace("*/", "* /")


def docstring(value: str) -> str:
    text = oneline(value).replace('"""', '\\"\\"\\"').rstrip("\\")
    return text + " " if text.endswith('"') else text


def go_raw(value: str) -> str:
    """Make text safe inside a Go raw (backtick) string."""
    return value.replace("`", "\\u0060")


def template_environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters.update(
        quote=quote,
        json=json_literal,
        oneline=oneline,
        comment=comment,
        docstring=docstring,
        go_raw=go_raw,
    )
    return env


def input_schema(tool: ToolConfig) -> dict[str, Any]:
    """The ``inputSchema`` object: spec-style type strings, not native types."""
    return {
        "type": "object",
        "properties": {
            p.name: {"type": p.type, "description": p.description} for p in tool.parameters
        },
        "required": tool.required_names,
    }


def tool_schema(tool: ToolConfig) -> dict[str, Any]:
    return {"name": tool.name, "description": tool.description, "inputSchema": input_schema(tool)}


class ToolEmitter:
    """Renders tool source files for one target language."""

    def __init__(self, language: Language, env: jinja2.Environment | None = None):
        self.language = language
        self.env = env or template_environment()

    def fields(self, tool: ToolConfig) -> list[dict[str, Any]]:
        lang = self.language
        result = []
        for p in tool.parameters:
            native = lang.native_type(p.type)
            field = lang.field_name(p.name)
            result.append({
                "name": p.name,
                "field": field,
                "renamed": field != p.name,
                "tag": p.type,
                "native": native if p.required else lang.optional_type(native, p.type),
                "required": p.required,
                "description": p.description,
            })
        return result

    def context(self, tool: ToolConfig) -> dict[str, Any]:
        lang = self.language
        fields = self.fields(tool)
        return {
            "tool": tool,
            "fields": fields,
            "any_renamed": any(f["renamed"] for f in fields),
            "type_name": to_pascal_case(tool.name),
            "function_name": lang.function_name(tool.name),
            "schema_name": lang.schema_name(tool.name),
            "input_schema": input_schema(tool),
            "tool_schema": tool_schema(tool),
        }

    def render_source(self, tool: ToolConfig) -> str:
        template = self.env.get_template(self.language.tool_template)
        return template.render(**self.context(tool))

    def render(self, tool: ToolConfig) -> EmittedTool:
        path = self.language.tool_path(tool.name)
        return EmittedTool(
            path=path,
            content=self.render_source(tool),
            next_steps=tuple(self.language.registration_steps(tool.name, path)),
        )
