"""Built-in tool presets for ``create --preset``."""

from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

from mcp_new.errors import GenerationError
from mcp_new.models import ToolConfig, ToolParameter


class Preset(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    tools: tuple[ToolConfig, ...]


def _param(name: str, type_: str, description: str, required: bool = True) -> ToolParameter:
    return ToolParameter(name=name, type=type_, description=description, required=required)


DATABASE = Preset(
    id="database",
    name="Database CRUD",
    description="Tools for database operations: query, insert, update, delete",
    tools=[
        ToolConfig(
            name="query",
            description="Execute a SQL query on the database",
            parameters=[
                _param("sql", "string", "SQL query to execute"),
                _param("params", "array", "Query parameters for prepared statements", required=False),
            ],
        ),
        ToolConfig(
            name="insert",
            description="Insert a new record into a table",
            parameters=[
                _param("table", "string", "Table name"),
                _param("data", "object", "Record data as key-value pairs"),
            ],
        ),
        ToolConfig(
            name="update",
            description="Update records in a table",
            parameters=[
                _param("table", "string", "Table name"),
                _param("data", "object", "Fields to update as key-value pairs"),
                _param("where", "object", "WHERE conditions as key-value pairs"),
            ],
        ),
        ToolConfig(
            name="delete",
            description="Delete records from a table",
            parameters=[
                _param("table", "string", "Table name"),
                _param("where", "object", "WHERE conditions as key-value pairs"),
            ],
        ),
        ToolConfig(name="list_tables", description="List all tables in the database"),
    ],
)

REST_API = Preset(
    id="rest-api",
    name="REST API Wrapper",
    description="Tools for making HTTP requests: GET, POST, PUT, DELETE",
    tools=[
        ToolConfig(
            name="http_get",
            description="Make an HTTP GET request",
            parameters=[
                _param("url", "string", "URL to request (can be relative if base_url is set)"),
                _param("headers", "object", "Request headers as key-value pairs", required=False),
                _param("query", "object", "Query parameters as key-value pairs", required=False),
            ],
        ),
        ToolConfig(
            name="http_post",
            description="Make an HTTP POST request",
            parameters=[
                _param("url", "string", "URL to request"),
                _param("body", "object", "Request body (will be JSON encoded)", required=False),
                _param("headers", "object", "Request headers as key-value pairs", required=False),
            ],
        ),
        ToolConfig(
            name="http_put",
            description="Make an HTTP PUT request",
            parameters=[
                _param("url", "string", "URL to request"),
                _param("body", "object", "Request body (will be JSON encoded)", required=False),
                _param("headers", "object", "Request headers as key-value pairs", required=False),
            ],
        ),
        ToolConfig(
            name="http_delete",
            description="Make an HTTP DELETE request",
            parameters=[
                _param("url", "string", "URL to request"),
                _param("headers", "object", "Request headers as key-value pairs", required=False),
            ],
        ),
        ToolConfig(
            name="set_base_url",
            description="Set the base URL for all subsequent requests",
            parameters=[_param("base_url", "string", "Base URL (e.g., https://api.example.com)")],
        ),
    ],
)

FILESYSTEM = Preset(
    id="filesystem",
    name="File System Tools",
    description="Tools for file operations: read, write, list, search",
    tools=[
        ToolConfig(
            name="read_file",
            description="Read the contents of a file",
            parameters=[
                _param("path", "string", "Path to the file to read"),
                _param("encoding", "string", "File encoding (default: utf-8)", required=False),
            ],
        ),
        ToolConfig(
            name="write_file",
            description="Write content to a file",
            parameters=[
                _param("path", "string", "Path to the file to write"),
                _param("content", "string", "Content to write to the file"),
                _param("append", "boolean", "Append to file instead of overwriting (default: false)", required=False),
            ],
        ),
        ToolConfig(
            name="list_directory",
            description="List files and directories in a path",
            parameters=[
                _param("path", "string", "Directory path to list"),
                _param("recursive", "boolean", "List recursively (default: false)", required=False),
            ],
        ),
        ToolConfig(
            name="search_files",
            description="Search for files matching a pattern",
            parameters=[
                _param("path", "string", "Directory to search in"),
                _param("pattern", "string", "Glob pattern to match (e.g., *.txt)"),
                _param("recursive", "boolean", "Search recursively (default: true)", required=False),
            ],
        ),
        ToolConfig(
            name="file_info",
            description="Get information about a file or directory",
            parameters=[_param("path", "string", "Path to the file or directory")],
        ),
    ],
)


class PresetRegistry:
    """Immutable lookup of presets by id, in declaration order."""

    def __init__(self, presets: list[Preset]):
        self._presets = MappingProxyType({p.id: p for p in presets})

    def __iter__(self):
        return iter(self._presets.values())

    def __contains__(self, preset_id: str) -> bool:
        return preset_id in self._presets

    @property
    def ids(self) -> list[str]:
        return list(self._presets)

    def get(self, preset_id: str) -> Preset:
        try:
            return self._presets[preset_id]
        except KeyError:
            raise GenerationError(
                f'Unknown preset "{preset_id}". Valid presets: {", ".join(self.ids)}'
            ) from None


def default_presets() -> PresetRegistry:
    return PresetRegistry([DATABASE, REST_API, FILESYSTEM])
