import pytest
from pydantic import ValidationError

from api_load_templates.generator.base import FieldDescriptor, ProcessOptions, SecurityContext
from api_load_templates.parser.base import ApiEndpoint, Param, SchemaNode


class TestParam:
    def test_create_query_param_defaults(self):
        p = Param(name="page", location="query")
        assert p.required is False
        assert p.param_type == "string"
        assert p.constraints == {}


class TestApiEndpoint:
    def test_create_minimal_endpoint(self):
        ep = ApiEndpoint(id=1, method="GET", path="/api/users")
        assert ep.summary == ""
        assert ep.parameters == []
        assert ep.request_body is None


class TestSchemaNode:
    def test_ref_alias(self):
        node = SchemaNode.model_validate({"$ref": "#/components/schemas/Pet"})
        assert node.ref == "#/components/schemas/Pet"

    def test_nested_properties_are_nodes(self):
        node = SchemaNode.model_validate(
            {"type": "object", "properties": {"tags": {"type": "array", "items": {"type": "string"}}}}
        )
        assert node.properties["tags"].items.type == "string"

    def test_non_mapping_node_becomes_empty(self):
        node = SchemaNode.model_validate("not a schema")
        assert node.type is None
        assert node.properties == {}

    def test_malformed_fields_fall_back_to_defaults(self):
        node = SchemaNode.model_validate(
            {
                "type": 42,
                "properties": ["a", "b"],
                "required": "name",
                "items": "string",
                "enum": "red",
                "minimum": True,
                "maximum": "10",
                "format": 7,
            }
        )
        assert node.type is None
        assert node.properties == {}
        assert node.required == []
        assert node.items is None
        assert node.enum is None
        assert node.minimum is None
        assert node.maximum is None
        assert node.format is None

    def test_non_mapping_property_becomes_empty_node(self):
        node = SchemaNode.model_validate({"type": "object", "properties": {"flag": True}})
        assert node.properties["flag"] == SchemaNode()

    def test_nullable_type_list_uses_first_real_type(self):
        node = SchemaNode.model_validate({"type": ["null", "string"]})
        assert node.type == "string"

    def test_tuple_items_use_first_entry(self):
        node = SchemaNode.model_validate({"type": "array", "items": [{"type": "integer"}, {"type": "string"}]})
        assert node.items.type == "integer"

    def test_numbers_kept_verbatim(self):
        node = SchemaNode.model_validate({"type": "number", "minimum": 1, "maximum": 2.5})
        assert node.minimum == 1
        assert isinstance(node.minimum, int)
        assert node.maximum == 2.5

    def test_node_is_frozen(self):
        node = SchemaNode(type="string")
        with pytest.raises(ValidationError):
            node.type = "integer"


class TestFieldDescriptor:
    def test_json_dict_uses_reference_name_alias(self):
        field = FieldDescriptor(type="reference", path="owner", reference_name="Owner")
        assert field.to_json_dict() == {
            "type": "reference",
            "required": False,
            "path": "owner",
            "referenceName": "Owner",
        }

    def test_json_dict_omits_absent_extras(self):
        field = FieldDescriptor(type="integer", path="age", minimum=0)
        data = field.to_json_dict()
        assert data["minimum"] == 0
        assert "maximum" not in data
        assert "format" not in data


class TestSecurityContext:
    def test_empty_value_sends_no_header(self):
        assert SecurityContext().as_headers() == {}

    def test_header_from_name_and_value(self):
        ctx = SecurityContext(header_name="X-Api-Key", header_value="abc")
        assert ctx.as_headers() == {"X-Api-Key": "abc"}


class TestProcessOptions:
    def test_defaults(self):
        opts = ProcessOptions(total_requests=10, threads=2)
        assert opts.selected_ids == []
        assert opts.token is None

    @pytest.mark.parametrize("field", ["total_requests", "threads"])
    def test_rejects_non_positive_counts(self, field):
        values = {"total_requests": 10, "threads": 2, field: 0}
        with pytest.raises(ValidationError):
            ProcessOptions(**values)
