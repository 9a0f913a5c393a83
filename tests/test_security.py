import logging

import pytest

from api_load_templates.generator.security import resolve_security


class TestResolveSecurity:
    def test_no_token_disables_auth(self):
        ctx = resolve_security([{"bearerAuth": []}], {"bearerAuth": {"type": "http", "scheme": "bearer"}}, None)
        assert (ctx.header_name, ctx.header_value) == ("Authorization", "")

    def test_no_requirements_disables_auth(self):
        ctx = resolve_security([], {"bearerAuth": {"type": "http", "scheme": "bearer"}}, "abc")
        assert ctx.header_value == ""

    def test_bearer(self):
        ctx = resolve_security([{"bearerAuth": []}], {"bearerAuth": {"type": "http", "scheme": "bearer"}}, "abc")
        assert (ctx.header_name, ctx.header_value) == ("Authorization", "Bearer abc")

    def test_http_scheme_is_case_insensitive(self):
        ctx = resolve_security([{"auth": []}], {"auth": {"type": "http", "scheme": "Bearer"}}, "abc")
        assert ctx.header_value == "Bearer abc"

    def test_basic(self):
        ctx = resolve_security([{"basicAuth": []}], {"basicAuth": {"type": "http", "scheme": "basic"}}, "dXNlcjpwdw==")
        assert ctx.header_value == "Basic dXNlcjpwdw=="

    def test_swagger2_basic(self):
        ctx = resolve_security([{"basicAuth": []}], {"basicAuth": {"type": "basic"}}, "abc")
        assert ctx.header_value == "Basic abc"

    def test_api_key_header(self):
        schemes = {"key": {"type": "apiKey", "in": "header", "name": "X-Api-Key"}}
        ctx = resolve_security([{"key": []}], schemes, "abc")
        assert (ctx.header_name, ctx.header_value) == ("X-Api-Key", "abc")

    @pytest.mark.parametrize("scheme_type", ["oauth2", "openIdConnect"])
    def test_token_based_schemes_use_bearer(self, scheme_type, caplog):
        with caplog.at_level(logging.WARNING):
            ctx = resolve_security([{"oauth": ["read"]}], {"oauth": {"type": scheme_type}}, "abc")
        assert ctx.header_value == "Bearer abc"
        assert caplog.records == []

    def test_only_first_requirement_and_scheme_are_used(self):
        schemes = {
            "key": {"type": "apiKey", "in": "header", "name": "X-Api-Key"},
            "bearerAuth": {"type": "http", "scheme": "bearer"},
        }
        ctx = resolve_security([{"key": [], "bearerAuth": []}, {"bearerAuth": []}], schemes, "abc")
        assert ctx.header_name == "X-Api-Key"

    def test_unknown_scheme_falls_back_to_bearer_with_warning(self, caplog):
        schemes = {"key": {"type": "apiKey", "in": "query", "name": "api_key"}}
        with caplog.at_level(logging.WARNING, logger="api_load_templates.generator.security"):
            ctx = resolve_security([{"key": []}], schemes, "abc")
        assert (ctx.header_name, ctx.header_value) == ("Authorization", "Bearer abc")
        assert "Unsupported security scheme" in caplog.text

    def test_missing_scheme_applies_no_header_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="api_load_templates.generator.security"):
            ctx = resolve_security([{"ghost": []}], {}, "abc")
        assert ctx.as_headers() == {}
        assert "'ghost' is not defined" in caplog.text

    def test_empty_requirement_means_optional_auth(self):
        ctx = resolve_security([{}], {"bearerAuth": {"type": "http", "scheme": "bearer"}}, "abc")
        assert ctx.as_headers() == {}
