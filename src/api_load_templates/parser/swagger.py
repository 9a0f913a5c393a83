"""OpenAPI / Swagger document parser.

Normalizes OpenAPI 3.x and Swagger 2.0 documents into a SwaggerDocument
with endpoints numbered in declaration order.
"""

import logging

from .base import ApiEndpoint, Param, SchemaNode, SwaggerDocument

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


def parse_document(doc: dict) -> SwaggerDocument:
    """Build a SwaggerDocument from a decoded document."""
    components = doc.get("components") or {}
    paths = doc.get("paths") or {}

    return SwaggerDocument(
        info=doc.get("info") or {},
        servers=doc.get("servers") or [],
        paths=paths,
        endpoints=_parse_endpoints(doc, paths),
        definitions=_parse_definitions(doc.get("definitions") or components.get("schemas") or {}),
        security=[r for r in doc.get("security") or [] if isinstance(r, dict)],
        security_schemes={
            str(name): scheme
            for name, scheme in (components.get("securitySchemes") or doc.get("securityDefinitions") or {}).items()
            if isinstance(scheme, dict)
        },
    )


def _parse_endpoints(doc: dict, paths: dict) -> list[ApiEndpoint]:
    endpoints = []

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        shared_params = path_item.get("parameters") or []

        for method, operation in path_item.items():
            if str(method).lower() not in HTTP_METHODS or not isinstance(operation, dict):
                continue

            raw_params = _merge_parameters(doc, shared_params, operation.get("parameters") or [])
            endpoints.append(
                ApiEndpoint(
                    id=len(endpoints) + 1,
                    method=str(method).upper(),
                    path=str(path),
                    summary=_text(operation.get("summary") or operation.get("description")),
                    tags=[str(t) for t in _as_list(operation.get("tags"))],
                    parameters=[_parse_param(p) for p in raw_params],
                    request_body=_parse_request_body(doc, operation, raw_params),
                )
            )

    logger.debug("Enumerated %d endpoints", len(endpoints))
    return endpoints


def _merge_parameters(doc: dict, shared: list, own: list) -> list[dict]:
    """Path-level parameters, overridden by operation-level ones on (name, in)."""
    merged: dict[tuple, dict] = {}
    for p in list(shared) + list(own):
        p = _resolve_local_ref(doc, p)
        if isinstance(p, dict) and "name" in p:
            merged[(str(p["name"]), _location(p))] = p
    return list(merged.values())


def _parse_param(p: dict) -> Param:
    # Swagger 2.0 keeps type/format on the parameter itself
    schema = p.get("schema") if isinstance(p.get("schema"), dict) else p
    constraints = {}
    for key in ("minimum", "maximum", "minLength", "maxLength", "pattern", "enum"):
        if key in schema:
            constraints[key] = schema[key]

    return Param(
        name=str(p["name"]),
        location=_location(p),
        required=bool(p.get("required", False)),
        param_type=schema.get("type") if isinstance(schema.get("type"), str) else "string",
        description=_text(p.get("description")),
        constraints=constraints,
    )


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _text(value) -> str:
    return "" if value is None else str(value)


def _location(p: dict) -> str:
    location = p.get("in")
    return location if isinstance(location, str) else "query"


def _parse_request_body(doc: dict, operation: dict, params: list[dict]) -> dict | None:
    body = _resolve_local_ref(doc, operation.get("requestBody"))
    if isinstance(body, dict):
        return body

    # Swagger 2.0: the body is an `in: body` parameter
    for p in params:
        if p.get("in") == "body" and isinstance(p.get("schema"), dict):
            return {"content": {"application/json": {"schema": p["schema"]}}}
    return None


def _parse_definitions(raw: dict) -> dict[str, SchemaNode]:
    if not isinstance(raw, dict):
        return {}
    return {str(name): SchemaNode.model_validate(schema) for name, schema in raw.items()}


def _resolve_local_ref(doc: dict, node):
    """Follow a single `#/...` reference inside the document."""
    if not isinstance(node, dict) or not isinstance(node.get("$ref"), str):
        return node
    ref = node["$ref"]
    if not ref.startswith("#/"):
        return node

    target = doc
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(target, dict) or part not in target:
            logger.warning("Unresolvable reference %s", ref)
            return None
        target = target[part]
    return target
