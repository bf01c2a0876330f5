"""Format-agnostic tool and project models.

Every generation mode (wizard, preset, spec import, prompt) converges on
``ToolConfig``; ``ProjectConfig`` is what the template stage receives.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mcp_new.naming import check_project_name, check_tool_name

ParamType = Literal["string", "number", "boolean", "object", "array"]
LanguageId = Literal["typescript", "python", "go", "rust"]
Transport = Literal["stdio", "sse"]

PARAM_TYPES: tuple[str, ...] = ("string", "number", "boolean", "object", "array")
TRANSPORTS: tuple[str, ...] = ("stdio", "sse")


class ToolParameter(BaseModel):
    """A single input of a tool."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    type: ParamType = "string"
    description: str = ""
    required: bool = True


class ToolConfig(BaseModel):
    """A callable unit generated into a project."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: tuple[ToolParameter, ...] = ()

    @field_validator("name")
    @classmethod
    def _valid_name(cls, value: str) -> str:
        error = check_tool_name(value)
        if error:
            raise ValueError(error)
        return value

    @property
    def required_names(self) -> list[str]:
        return [p.name for p in self.parameters if p.required]


class ResourceConfig(BaseModel):
    """A static resource exposed by the generated server."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    uri: str = Field(min_length=1)
    description: str = ""
    mime_type: str | None = None


class ProjectConfig(BaseModel):
    """Everything the template stage needs to render a project."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    language: LanguageId = "typescript"
    transport: Transport = "stdio"
    tools: tuple[ToolConfig, ...] = ()
    resources: tuple[ResourceConfig, ...] = ()
    include_example_tool: bool = True
    skip_install: bool = False
    init_git: bool = True

    @field_validator("name")
    @classmethod
    def _valid_name(cls, value: str) -> str:
        error = check_project_name(value)
        if error:
            raise ValueError(error)
        return value
