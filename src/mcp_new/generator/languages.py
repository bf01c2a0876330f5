"""Target language descriptors.

Each supported language is described by data (type map, casing rules, file
layout, commands) rather than its own emitter. The generic renderer in
:mod:`mcp_new.generator.emitter` combines a descriptor with a Jinja2 template.
"""

import keyword
import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Mapping

from mcp_new.naming import to_camel_case, to_kebab_case, to_pascal_case

RUST_KEYWORDS = frozenset({
    "as", "async", "await", "break", "const", "continue", "crate", "dyn", "else", "enum",
    "extern", "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod",
    "move", "mut", "pub", "ref", "return", "self", "static", "struct", "super", "trait",
    "true", "type", "unsafe", "use", "where", "while", "yield",
    "abstract", "become", "box", "do", "final", "gen", "macro", "override", "priv", "try",
    "typeof", "unsized", "virtual",
})
# Path keywords cannot be written as raw identifiers.
RUST_PATH_KEYWORDS = frozenset({"self", "super", "crate"})
TS_RESERVED = frozenset({
    "arguments", "await", "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "eval", "export", "extends", "false", "finally",
    "for", "function", "if", "implements", "import", "in", "instanceof", "interface", "let",
    "new", "null", "package", "private", "protected", "public", "return", "static", "super",
    "switch", "this", "throw", "true", "try", "typeof", "var", "void", "while", "with", "yield",
    # module-level names in the generated src/index.ts
    "app", "express", "handlers", "main", "port", "resources", "server", "tools", "transport",
})
# module-level names in the generated src/server.py
PYTHON_ENTRY_NAMES = frozenset({
    "asyncio", "call_tool", "list_resources", "list_tools", "main", "os", "read_resource", "server",
})
# File name suffixes the go tool treats as build constraints.
GO_FILE_SUFFIXES = frozenset({
    "test", "aix", "android", "darwin", "dragonfly", "freebsd", "illumos", "ios", "js",
    "linux", "netbsd", "openbsd", "plan9", "solaris", "wasip1", "windows",
    "386", "amd64", "arm", "arm64", "loong64", "mips", "mipsle", "mips64", "mips64le",
    "ppc64", "ppc64le", "riscv64", "s390x", "wasm",
})
GO_SCALARS = frozenset({"string", "number", "boolean"})


def _identifier(name: str) -> str:
    """Make an arbitrary parameter name usable as a snake_case identifier."""
    ident = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    ident = re.sub(r"[^a-zA-Z0-9]+", "_", ident).strip("_").lower()
    if not ident or ident[0].isdigit():
        ident = f"_{ident}"
    return ident


def _ts_key(name: str) -> str:
    if re.fullmatch(r"[A-Za-z_$][A-Za-z0-9_$]*", name):
        return name
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _python_field(name: str) -> str:
    if name.isidentifier() and not keyword.iskeyword(name) and not name.startswith("_"):
        return name
    ident = _identifier(name).lstrip("_")
    if not ident or ident[0].isdigit():
        # pydantic treats leading underscores as private attributes
        ident = f"field_{ident}".rstrip("_")
    return f"{ident}_" if keyword.iskeyword(ident) else ident


def _go_field(name: str) -> str:
    field = to_pascal_case(_identifier(name).lstrip("_"))
    return field if field and not field[0].isdigit() else f"P{field}"


def _rust_field(name: str) -> str:
    ident = _identifier(name)
    if ident in RUST_PATH_KEYWORDS:
        return f"{ident}_"
    return f"r#{ident}" if ident in RUST_KEYWORDS else ident


def _ts_function(name: str) -> str:
    ident = to_camel_case(name)
    return f"{ident}Tool" if ident in TS_RESERVED else ident


def _python_module(name: str) -> str:
    """Tool name as a Python module and function name: ``import`` -> ``import_``."""
    return f"{name}_" if keyword.iskeyword(name) or name in PYTHON_ENTRY_NAMES else name


def _go_file(name: str) -> str:
    stem, _, suffix = name.rpartition("_")
    if stem and suffix in GO_FILE_SUFFIXES:
        return f"{name}_tool.go"
    return f"{name}.go"


def _rust_module(name: str) -> str:
    """Tool name as a Rust module path segment: ``type`` -> ``r#type``, ``self`` -> ``self_tool``."""
    if name in RUST_PATH_KEYWORDS:
        return f"{name}_tool"
    return f"r#{name}" if name in RUST_KEYWORDS else name


def _go_optional(native: str, tag: str) -> str:
    return f"*{native}" if tag in GO_SCALARS else native


@dataclass(frozen=True)
class Language:
    """Everything the emitter and project renderer need to know about one language."""

    id: str
    display_name: str
    type_map: Mapping[str, str]
    optional_type: Callable[[str, str], str]  # (native type, tag) -> optional native type
    field_name: Callable[[str], str]
    function_name: Callable[[str], str]
    schema_name: Callable[[str], str]
    tool_file_name: Callable[[str], str]
    module_name: Callable[[str], str]  # how the entry point imports the tool file
    tools_dir: str
    entry_point: str
    manifest: str
    tool_template: str
    project_template_dir: str
    install_command: tuple[str, ...]
    run_command: str
    registration_steps: Callable[[str, str], list[str]]  # (tool name, tool file) -> hints
    transports: tuple[str, ...] = ("stdio", "sse")

    def native_type(self, tag: str) -> str:
        """Native type for a tool parameter type; unknown tags fall back to the string type."""
        return self.type_map.get(tag, self.type_map["string"])

    def tool_path(self, tool_name: str) -> str:
        return f"{self.tools_dir}/{self.tool_file_name(tool_name)}"


class LanguageRegistry:
    """Immutable, ordered collection of the supported target languages."""

    def __init__(self, languages: list[Language]):
        self._languages = MappingProxyType({lang.id: lang for lang in languages})

    def __iter__(self):
        return iter(self._languages.values())

    def __contains__(self, language_id: str) -> bool:
        return language_id in self._languages

    @property
    def ids(self) -> list[str]:
        return list(self._languages)

    def get(self, language_id: str) -> Language:
        try:
            return self._languages[language_id]
        except KeyError:
            raise KeyError(f"Unsupported language: {language_id}. Choose from: {', '.join(self.ids)}") from None

    def detect(self, project_dir: Path) -> Language | None:
        """Return the language whose manifest file exists in ``project_dir``."""
        for lang in self:
            if (project_dir / lang.manifest).exists():
                return lang
        return None


TYPESCRIPT = Language(
    id="typescript",
    display_name="TypeScript",
    type_map=MappingProxyType({
        "string": "string",
        "number": "number",
        "boolean": "boolean",
        "object": "Record<string, unknown>",
        "array": "unknown[]",
    }),
    optional_type=lambda native, tag: native,
    field_name=_ts_key,
    function_name=_ts_function,
    schema_name=lambda name: f"{to_camel_case(name)}Schema",
    tool_file_name=lambda name: f"{to_kebab_case(name)}.ts",
    module_name=to_kebab_case,
    tools_dir="src/tools",
    entry_point="src/index.ts",
    manifest="package.json",
    tool_template="tools/typescript.ts.j2",
    project_template_dir="projects/typescript",
    install_command=("npm", "install"),
    run_command="npm run dev",
    registration_steps=lambda name, path: [
        f"Implement the tool logic in {path}",
        f"Import {_ts_function(name)} and {to_camel_case(name)}Schema in src/index.ts and add them to the tool registry",
    ],
)

PYTHON = Language(
    id="python",
    display_name="Python",
    type_map=MappingProxyType({
        "string": "str",
        "number": "float",
        "boolean": "bool",
        "object": "dict",
        "array": "list",
    }),
    optional_type=lambda native, tag: f"{native} | None",
    field_name=_python_field,
    function_name=_python_module,
    schema_name=lambda name: f"{name.upper()}_SCHEMA",
    tool_file_name=lambda name: f"{_python_module(name)}.py",
    module_name=_python_module,
    tools_dir="src/tools",
    entry_point="src/server.py",
    manifest="pyproject.toml",
    tool_template="tools/python.py.j2",
    project_template_dir="projects/python",
    install_command=("pip", "install", "-r", "requirements.txt"),
    run_command="python -m src.server",
    registration_steps=lambda name, path: [
        f"Implement the tool logic in {path}",
        f"Import {_python_module(name)} and {name.upper()}_SCHEMA in src/server.py and add them to the TOOLS table",
    ],
)

GO = Language(
    id="go",
    display_name="Go",
    type_map=MappingProxyType({
        "string": "string",
        "number": "float64",
        "boolean": "bool",
        "object": "map[string]interface{}",
        "array": "[]interface{}",
    }),
    optional_type=_go_optional,
    field_name=_go_field,
    function_name=to_pascal_case,
    schema_name=lambda name: f"{to_pascal_case(name)}Tool",
    tool_file_name=_go_file,
    module_name=lambda name: "tools",
    tools_dir="internal/tools",
    entry_point="cmd/server/main.go",
    manifest="go.mod",
    tool_template="tools/go.go.j2",
    project_template_dir="projects/go",
    install_command=("go", "mod", "tidy"),
    run_command="go run ./cmd/server",
    registration_steps=lambda name, path: [
        f"Implement the tool logic in {path}",
        f"Register tools.{to_pascal_case(name)}Tool() with tools.Handle{to_pascal_case(name)} in cmd/server/main.go",
    ],
)

RUST = Language(
    id="rust",
    display_name="Rust",
    type_map=MappingProxyType({
        "string": "String",
        "number": "f64",
        "boolean": "bool",
        "object": "serde_json::Map<String, serde_json::Value>",
        "array": "Vec<serde_json::Value>",
    }),
    optional_type=lambda native, tag: f"Option<{native}>",
    field_name=_rust_field,
    function_name=_rust_module,
    schema_name=lambda name: "definition",
    tool_file_name=lambda name: f"{_rust_module(name).removeprefix('r#')}.rs",
    module_name=_rust_module,
    tools_dir="src/tools",
    entry_point="src/main.rs",
    manifest="Cargo.toml",
    tool_template="tools/rust.rs.j2",
    project_template_dir="projects/rust",
    install_command=("cargo", "build"),
    run_command="cargo run",
    registration_steps=lambda name, path: [
        f"Implement the tool logic in {path}",
        f"Add `pub mod {_rust_module(name)};` to src/tools/mod.rs",
        f"Add a match arm for \"{name}\" calling tools::{_rust_module(name)}::handle in src/main.rs"
        f" and list tools::{_rust_module(name)}::definition() in the tools list",
    ],
    transports=("stdio",),
)


def default_languages() -> LanguageRegistry:
    return LanguageRegistry([TYPESCRIPT, PYTHON, GO, RUST])
