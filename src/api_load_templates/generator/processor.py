"""Endpoint processor — turns a document into per-endpoint call templates."""

import json
import logging

from pydantic import ValidationError

from api_load_templates.config import DEFAULT_TIMEOUT
from api_load_templates.errors import FetchError, ProcessingError, SwaggerError
from api_load_templates.generator.base import (
    EndpointRef,
    ProcessedTemplate,
    ProcessingResult,
    ProcessOptions,
    SecurityContext,
)
from api_load_templates.generator.paths import compose_path, resolve_base_url
from api_load_templates.generator.schema_walker import build_request_body
from api_load_templates.generator.security import resolve_security
from api_load_templates.parser.base import ApiEndpoint, SchemaNode, SwaggerDocument
from api_load_templates.parser.loader import fetch_document
from api_load_templates.parser.swagger import parse_document
from api_load_templates.store import TemplateStore

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
PLACEHOLDER_BODY = {"dummy_data": "value"}


def _to_json(value) -> str:
    return json.dumps(value, default=str, ensure_ascii=False)


def select_endpoints(endpoints: list[ApiEndpoint], selected_ids: list[int] | None) -> list[ApiEndpoint]:
    """All endpoints when *selected_ids* is empty, else those with a matching id."""
    if not selected_ids:
        return list(endpoints)
    wanted = set(selected_ids)
    return [ep for ep in endpoints if ep.id in wanted]


def synthesize_request_body(
    endpoint: ApiEndpoint, definitions: dict[str, SchemaNode]
) -> tuple[str | None, str | None]:
    """Return ``(request_body, request_field_info)`` as JSON text.

    Both are None when the endpoint has no body or the walk fails.
    """
    if not endpoint.request_body:
        return None, None

    try:
        content = endpoint.request_body.get("content") or {}
        media = content.get(JSON_CONTENT_TYPE) or next(iter(content.values()), None)
        if not isinstance(media, dict) or not media.get("schema"):
            return _to_json(PLACEHOLDER_BODY), None

        value, field = build_request_body(SchemaNode.model_validate(media["schema"]), definitions)
        return _to_json(value), _to_json(field.to_json_dict())
    except Exception:
        logger.warning("Could not synthesize request body for %s %s", endpoint.method, endpoint.path, exc_info=True)
        return None, None


def build_template(
    endpoint: ApiEndpoint,
    base_url: str,
    definitions: dict[str, SchemaNode],
    security: SecurityContext,
) -> ProcessedTemplate:
    request_body, field_info = synthesize_request_body(endpoint, definitions)
    headers = {"Content-Type": JSON_CONTENT_TYPE, **security.as_headers()}
    return ProcessedTemplate(
        method=endpoint.method,
        full_path=f"{base_url}{compose_path(endpoint.path, endpoint.parameters)}",
        summary=endpoint.summary,
        request_body=request_body,
        request_field_info=field_info,
        request_headers=_to_json(headers),
    )


def build_templates(
    document: SwaggerDocument,
    base_url: str,
    selected_ids: list[int] | None = None,
    token: str | None = None,
) -> list[ProcessedTemplate]:
    """Build templates for the selected endpoints, in document order."""
    security = resolve_security(document.security, document.security_schemes, token)
    return [
        build_template(endpoint, base_url, document.definitions, security)
        for endpoint in select_endpoints(document.endpoints, selected_ids)
    ]


class EndpointProcessor:
    """Fetches a document and derives call templates from it.

    Only `process_swagger_data` talks to the store; the other entry points
    are read-only previews.
    """

    def __init__(self, store: TemplateStore | None = None, timeout: float = DEFAULT_TIMEOUT):
        self.store = store
        self.timeout = timeout

    def get_swagger_data(self, url: str) -> SwaggerDocument:
        doc = fetch_document(url, timeout=self.timeout)
        try:
            return parse_document(doc)
        except ValidationError as e:
            raise FetchError(f"{url} has an unsupported document structure: {e}") from e

    def get_endpoint_paths(self, url: str) -> list[EndpointRef]:
        document = self.get_swagger_data(url)
        return [EndpointRef(id=ep.id, method=ep.method, path=ep.path) for ep in document.endpoints]

    def extract_request_body_templates(
        self,
        url: str,
        selected_ids: list[int] | None = None,
        token: str | None = None,
    ) -> list[ProcessedTemplate]:
        document = self.get_swagger_data(url)
        templates = build_templates(document, resolve_base_url(url), selected_ids, token)
        logger.info("Built %d templates from %s", len(templates), url)
        return templates

    def process_swagger_data(self, url: str, user_id: str, options: ProcessOptions) -> ProcessingResult:
        """Build templates and hand each one to the store.

        Raises:
            FetchError: the document could not be fetched or decoded.
            ProcessingError: a template could not be built or persisted.
        """
        if not user_id:
            raise ValueError("user_id is required")
        if self.store is None:
            raise ProcessingError("no template store configured")

        document = self.get_swagger_data(url)
        try:
            templates = build_templates(document, resolve_base_url(url), options.selected_ids, options.token)
            saved = [
                self.store.save(
                    template,
                    user_id=user_id,
                    total_requests=options.total_requests,
                    threads=options.threads,
                )
                for template in templates
            ]
        except SwaggerError:
            raise
        except Exception as e:
            raise ProcessingError(str(e)) from e

        logger.info("Processed %d endpoints from %s for user %s", len(saved), url, user_id)
        return ProcessingResult(swagger_info=document.info, endpoints_processed=len(saved), endpoints=saved)
