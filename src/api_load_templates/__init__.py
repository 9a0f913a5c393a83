"""Derive synthetic load-test call templates from OpenAPI/Swagger documents."""

__version__ = "0.1.0"
