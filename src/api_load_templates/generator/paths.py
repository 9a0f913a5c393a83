"""Concrete URL composition: base URL from the docs URL, path from the template."""

import logging
import re
from urllib.parse import urlsplit

from api_load_templates.parser.base import Param

logger = logging.getLogger(__name__)

DOC_MARKERS = ("api-docs", "swagger", "v3")

_PATH_PARAM = re.compile(r"\{([^}]+)\}")


def compose_path(path_template: str, parameters: list[Param]) -> str:
    """Substitute path placeholders and append dummy query parameters."""
    full_path = _PATH_PARAM.sub(lambda m: f"dummy_{m.group(1)}", path_template)

    query = [p for p in parameters if p.location == "query"]
    if query:
        full_path += "?" + "&".join(f"{p.name}=dummy_value" for p in query)
    return full_path


def resolve_base_url(document_url: str) -> str:
    """Strip the documentation sub-path off *document_url*.

    The path is cut before the first segment containing a documentation
    marker; without one, only ``scheme://host`` is kept. Returns ``""``
    when the URL cannot be parsed.
    """
    try:
        parts = urlsplit(document_url)
    except ValueError as e:
        logger.warning("Could not parse documentation URL %r: %s", document_url, e)
        return ""
    if not parts.scheme or not parts.netloc:
        return ""

    host = parts.netloc.rpartition("@")[2]
    segments = parts.path.split("/")
    for index, segment in enumerate(segments):
        if any(marker in segment for marker in DOC_MARKERS):
            return f"{parts.scheme}://{host}{'/'.join(segments[:index])}"
    return f"{parts.scheme}://{host}"
