"""Schema walker — turns a schema into a synthetic value plus field metadata.

Cycles through `$ref` are broken with a visited set of reference names.
The set lives for one top-level walk and is shared by every branch of
that walk, so a reference seen once is emitted as a sentinel afterwards.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from api_load_templates.generator.base import FieldDescriptor
from api_load_templates.parser.base import SchemaNode

logger = logging.getLogger(__name__)

PLACEHOLDER_STRING = "dummy_string"
PLACEHOLDER_VALUE = "dummy_value"
PLACEHOLDER_ARRAY_ITEM = "dummy_array_item"
EXAMPLE_EMAIL = "user@example.com"
NIL_UUID = "00000000-0000-0000-0000-000000000000"


class SchemaKind(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    REFERENCE = "reference"
    UNKNOWN = "unknown"


def schema_kind(schema: SchemaNode) -> SchemaKind:
    if schema.ref is not None:
        return SchemaKind.REFERENCE
    try:
        kind = SchemaKind(schema.type)
    except ValueError:
        return SchemaKind.UNKNOWN
    # "reference"/"unknown" are descriptor types, not schema types
    if kind in (SchemaKind.REFERENCE, SchemaKind.UNKNOWN):
        return SchemaKind.UNKNOWN
    return kind


def walk(
    schema: SchemaNode,
    definitions: dict[str, SchemaNode],
    visited: set[str] | None = None,
    path: str = "",
) -> tuple[Any, FieldDescriptor]:
    """Return ``(value, descriptor)`` for *schema*.

    Never raises on malformed schemas; unresolvable or repeated references
    yield ``{"dummy_reference": name}``.
    """
    if visited is None:
        visited = set()

    kind = schema_kind(schema)
    if kind is SchemaKind.REFERENCE:
        return _walk_reference(schema, definitions, visited, path)
    if kind is SchemaKind.OBJECT:
        return _walk_object(schema, definitions, visited, path)
    if kind is SchemaKind.ARRAY:
        return _walk_array(schema, definitions, visited, path)
    if kind is SchemaKind.STRING:
        return _string_value(schema), FieldDescriptor(
            type="string",
            path=path,
            format=schema.format or "text",
            enum=schema.enum,
        )
    if kind in (SchemaKind.INTEGER, SchemaKind.NUMBER):
        return 0, FieldDescriptor(
            type=kind.value,
            path=path,
            format=schema.format,
            minimum=schema.minimum,
            maximum=schema.maximum,
        )
    if kind is SchemaKind.BOOLEAN:
        return False, FieldDescriptor(type="boolean", path=path)
    # SchemaKind.UNKNOWN: the literal type string is passed through
    return PLACEHOLDER_VALUE, FieldDescriptor(type=schema.type or "unknown", path=path)


def build_request_body(schema: SchemaNode, definitions: dict[str, SchemaNode]) -> tuple[Any, FieldDescriptor]:
    """Walk a request body schema with a fresh visited set."""
    return walk(schema, definitions, set(), "")


def _walk_reference(schema, definitions, visited, path):
    name = schema.ref.split("/")[-1]
    if name in visited:
        logger.debug("Reference %s already visited at %r", name, path)
        return {"dummy_reference": name}, FieldDescriptor(type="reference", path=path)

    visited.add(name)
    target = definitions.get(name)
    if target is None:
        logger.debug("Reference %s not found in definitions", name)
        return {"dummy_reference": name}, FieldDescriptor(type="reference", path=path, reference_name=name)

    value, field = walk(target, definitions, visited, path)
    return value, field.model_copy(update={"reference_name": name})


def _walk_object(schema, definitions, visited, path):
    value = {}
    properties = {}
    for key, prop in schema.properties.items():
        child_path = f"{path}.{key}" if path else key
        child_value, child_field = walk(prop, definitions, visited, child_path)
        value[key] = child_value
        properties[key] = child_field.model_copy(update={"required": key in schema.required})

    return value, FieldDescriptor(type="object", path=path, properties=properties)


def _walk_array(schema, definitions, visited, path):
    items_path = f"{path}[]" if path else "[]"
    if schema.items is not None:
        item_value, item_field = walk(schema.items, definitions, visited, items_path)
    else:
        item_value = PLACEHOLDER_ARRAY_ITEM
        item_field = FieldDescriptor(type="unknown", path=items_path)

    return [item_value], FieldDescriptor(type="array", path=path, items=item_field)


def _string_value(schema: SchemaNode) -> Any:
    if schema.format == "date-time":
        return _utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")
    if schema.format == "date":
        return _utc_now().date().isoformat()
    if schema.format == "email":
        return EXAMPLE_EMAIL
    if schema.format == "uuid":
        return NIL_UUID
    if schema.enum:
        return schema.enum[0]
    return PLACEHOLDER_STRING


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)
