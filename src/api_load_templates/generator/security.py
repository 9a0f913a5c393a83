"""Security resolver — picks one auth header for a whole document.

Only the first scheme of the first security requirement is used; AND/OR
combinations and per-operation overrides are not modeled.
"""

import logging

from api_load_templates.generator.base import SecurityContext

logger = logging.getLogger(__name__)

AUTHORIZATION = "Authorization"


def resolve_security(
    requirements: list[dict],
    schemes: dict[str, dict],
    token: str | None,
) -> SecurityContext:
    """Resolve the header name and value for *token*.

    An empty header value means no auth header is sent.
    """
    if not token or not requirements:
        return SecurityContext()

    first = requirements[0]
    if not first:
        # `{}` marks auth as optional
        logger.debug("First security requirement is empty, no auth header applied")
        return SecurityContext()

    name = next(iter(first))
    scheme = schemes.get(name)
    if scheme is None:
        logger.warning("Security scheme %r is not defined, no auth header applied", name)
        return SecurityContext()

    scheme_type = str(scheme.get("type", "")).lower()
    http_scheme = str(scheme.get("scheme", "")).lower()

    if (scheme_type == "http" and http_scheme == "basic") or scheme_type == "basic":
        return SecurityContext(header_value=f"Basic {token}")
    if scheme_type == "http" and http_scheme == "bearer":
        return SecurityContext(header_value=f"Bearer {token}")
    if scheme_type == "apikey" and scheme.get("in") == "header" and scheme.get("name"):
        return SecurityContext(header_name=str(scheme["name"]), header_value=token)
    if scheme_type in ("oauth2", "openidconnect"):
        return SecurityContext(header_value=f"Bearer {token}")

    logger.warning(
        "Unsupported security scheme %r (type=%r, scheme=%r, in=%r), falling back to Bearer",
        name,
        scheme.get("type"),
        scheme.get("scheme"),
        scheme.get("in"),
    )
    return SecurityContext(header_value=f"Bearer {token}")
