"""Unified data models for parsed API specifications.

All parsers (OpenAPI, Swagger, Postman) convert their input
into these standard models for downstream processing.
"""

from pydantic import BaseModel, ConfigDict, Field


class ParsedParameter(BaseModel):
    """A single endpoint parameter (path, query, header, or flattened body field)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    location: str = Field(alias="in")  # path / query / header / body
    type: str = "string"  # raw type string from the source document
    description: str = ""
    required: bool = False


class ParsedEndpoint(BaseModel):
    """One (method, path) operation found in a spec."""

    model_config = ConfigDict(frozen=True)

    path: str  # /users/{id}
    method: str  # GET / POST / PUT / DELETE / PATCH / OPTIONS / HEAD
    operation_id: str = ""
    summary: str = ""
    description: str = ""
    parameters: tuple[ParsedParameter, ...] = ()
    tags: tuple[str, ...] = ()

    @property
    def label(self) -> str:
        return f"{self.method} {self.path}"
