"""Fetch an OpenAPI / Swagger document from a URL or a local file."""

import json
import logging
from pathlib import Path

import requests
import yaml

from api_load_templates.config import DEFAULT_TIMEOUT
from api_load_templates.errors import FetchError

logger = logging.getLogger(__name__)

DOCUMENT_MARKERS = ("openapi", "swagger", "paths")


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_document(source: str, timeout: float = DEFAULT_TIMEOUT) -> dict:
    """Retrieve and decode a document.

    Raises:
        FetchError: the document could not be retrieved, decoded, or does
            not look like an OpenAPI / Swagger document.
    """
    text = _fetch_remote(source, timeout) if is_remote(source) else _read_local(source)
    doc = decode_document(text)

    if not any(key in doc for key in DOCUMENT_MARKERS):
        raise FetchError(f"{source} is not an OpenAPI/Swagger document")

    logger.info("Fetched document from %s (%d paths)", source, len(doc.get("paths") or {}))
    return doc


def decode_document(text: str) -> dict:
    """Decode JSON, falling back to YAML."""
    try:
        doc = json.loads(text)
    except ValueError:
        try:
            doc = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise FetchError(f"content is neither JSON nor YAML: {e}") from e

    if not isinstance(doc, dict):
        raise FetchError("document root is not an object")
    return doc


def _fetch_remote(url: str, timeout: float) -> str:
    logger.debug("GET %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise FetchError(f"could not fetch {url}: {e}") from e
    return response.text


def _read_local(source: str) -> str:
    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FetchError(f"could not read {source}: {e}") from e
