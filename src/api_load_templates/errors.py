"""Terminal errors surfaced to callers.

Everything else (schema degradation, reference cycles, security scheme
mismatches) is recovered where it happens and only logged.
"""


class SwaggerError(Exception):
    """Base class for failures that abort a whole processing call."""

    kind = "error"
    message = "Swagger processing failed"

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(f"{self.message}: {detail}" if detail else self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind, "detail": self.detail}


class FetchError(SwaggerError):
    """The document could not be retrieved or decoded."""

    kind = "fetch"
    message = "Failed to fetch or parse Swagger data"


class ProcessingError(SwaggerError):
    """Derived templates could not be processed or persisted."""

    kind = "process"
    message = "Failed to process Swagger data"
