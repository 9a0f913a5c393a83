"""Data models for a parsed OpenAPI / Swagger document.

The loader and parser turn the raw document into these models; the
generator only ever reads them.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Param(BaseModel):
    """A single operation parameter (query, path, header, cookie, or body)."""

    name: str
    location: str  # query / path / header / cookie / body
    required: bool = False
    param_type: str = "string"
    description: str = ""
    constraints: dict = {}  # minimum, maximum, pattern, enum, etc.


class ApiEndpoint(BaseModel):
    """One (path, HTTP method) pair of the document."""

    id: int  # 1-based, declaration order, only stable within one run
    method: str  # GET / POST / PUT / DELETE / PATCH ...
    path: str  # /api/users/{id}
    summary: str = ""
    tags: list[str] = []
    parameters: list[Param] = []
    request_body: dict | None = None


class SchemaNode(BaseModel):
    """A JSON-Schema-like node.

    Decoding never fails: malformed fields fall back to the defaults the
    walker expects (empty properties, no items, no enum, ...).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ref: str | None = Field(default=None, alias="$ref")
    type: str | None = None
    properties: dict[str, "SchemaNode"] = {}
    required: list[str] = []
    items: "SchemaNode | None" = None
    format: str | None = None
    enum: list[Any] | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None

    @model_validator(mode="before")
    @classmethod
    def _coerce_node(cls, data: Any) -> Any:
        if isinstance(data, (dict, SchemaNode)):
            return data
        return {}

    @field_validator("ref", "format", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> str | None:
        # OpenAPI 3.1 allows ["string", "null"]
        if isinstance(value, list):
            value = next((t for t in value if isinstance(t, str) and t != "null"), None)
        return value if isinstance(value, str) else None

    @field_validator("properties", mode="before")
    @classmethod
    def _coerce_properties(cls, value: Any) -> dict:
        if not isinstance(value, dict):
            return {}
        return {str(key): prop if isinstance(prop, (dict, SchemaNode)) else {} for key, prop in value.items()}

    @field_validator("required", mode="before")
    @classmethod
    def _coerce_required(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [name for name in value if isinstance(name, str)]

    @field_validator("items", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> Any:
        # Tuple-style items: only the first entry is used
        if isinstance(value, list):
            value = next((item for item in value if isinstance(item, dict)), None)
        return value if isinstance(value, (dict, SchemaNode)) else None

    @field_validator("enum", mode="before")
    @classmethod
    def _coerce_enum(cls, value: Any) -> list | None:
        return value if isinstance(value, list) else None

    @field_validator("minimum", "maximum", mode="before")
    @classmethod
    def _number_or_none(cls, value: Any) -> int | float | None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value


class SwaggerDocument(BaseModel):
    """Normalized view of a whole document."""

    info: dict = {}
    servers: list = []
    paths: dict = {}
    endpoints: list[ApiEndpoint] = []
    definitions: dict[str, SchemaNode] = {}
    security: list[dict] = []
    security_schemes: dict[str, dict] = {}
