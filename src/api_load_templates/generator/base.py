"""Models produced by the generator and handed to collaborators."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class FieldDescriptor(BaseModel):
    """Structural metadata for one field of a synthesized request body.

    `path` is dotted/bracketed (``user.addresses[].city``) and unique within
    one descriptor tree. `required` is only ever set by the enclosing object.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str
    required: bool = False
    path: str = ""
    format: str | None = None
    enum: list[Any] | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    reference_name: str | None = Field(default=None, alias="referenceName")
    properties: dict[str, "FieldDescriptor"] | None = None
    items: "FieldDescriptor | None" = None

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class SecurityContext(BaseModel):
    """The auth header resolved once per document."""

    header_name: str = "Authorization"
    header_value: str = ""

    def as_headers(self) -> dict[str, str]:
        if not self.header_value:
            return {}
        return {self.header_name: self.header_value}


class ProcessedTemplate(BaseModel):
    """A synthetic call template for one endpoint."""

    method: str
    full_path: str
    summary: str = ""
    request_body: str | None = None  # JSON text
    request_field_info: str | None = None  # JSON text
    request_headers: str  # JSON text


class StoredTemplate(ProcessedTemplate):
    """A template as returned by the persistence collaborator."""

    id: int
    user_id: str
    total_requests: int
    threads: int
    load_status: bool = True


class EndpointRef(BaseModel):
    id: int
    method: str
    path: str


class ProcessOptions(BaseModel):
    """Options of the persisting entry point."""

    total_requests: PositiveInt
    threads: PositiveInt
    selected_ids: list[int] = []
    token: str | None = None


class ProcessingResult(BaseModel):
    swagger_info: dict = {}
    endpoints_processed: int = 0
    endpoints: list[StoredTemplate] = []
