"""Dialect-specific lookups: base URL, schema registry, request body schema.

Swagger 2.0 and OpenAPI 3.x disagree on where these three things live.
:class:`VersionHandler` hides the difference behind one interface so that the
sampler and the generator stay dialect-agnostic. There are exactly two
implementations and :func:`get_handler` is a closed mapping from
:class:`~openapi2http.models.Dialect` to them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from openapi2http.models import Dialect, Operation, SchemaFragment

DEFAULT_SWAGGER_SCHEME = "http"
DEFAULT_SWAGGER_HOST = "localhost"
DEFAULT_SERVER_URL = "http://localhost:5000"


class VersionHandler(ABC):
    """Dialect-specific extraction rules."""

    dialect: Dialect

    @abstractmethod
    def base_url(self, spec: dict[str, Any]) -> str:
        """Return the URL prefixed to every route in the output."""

    @abstractmethod
    def schema_dictionary(self, spec: dict[str, Any]) -> dict[str, Any]:
        """Return the named-schema registry that ``$ref`` pointers resolve against."""

    @abstractmethod
    def request_body_schema(self, operation: Operation) -> Optional[SchemaFragment]:
        """Return the schema of the operation's request body, if it declares one."""


class Swagger2Handler(VersionHandler):
    """Swagger 2.0: ``host``/``basePath``/``schemes``, ``definitions``, body parameters."""

    dialect = Dialect.SWAGGER_2

    def base_url(self, spec: dict[str, Any]) -> str:
        host = spec.get("host")
        if host is None:
            host = DEFAULT_SWAGGER_HOST
        base_path = spec.get("basePath")
        if base_path is None:
            base_path = ""
        schemes = spec.get("schemes")
        scheme = schemes[0] if isinstance(schemes, list) and schemes else DEFAULT_SWAGGER_SCHEME
        return f"{scheme}://{host}{base_path}"

    def schema_dictionary(self, spec: dict[str, Any]) -> dict[str, Any]:
        definitions = spec.get("definitions")
        return definitions if isinstance(definitions, dict) else {}

    def request_body_schema(self, operation: Operation) -> Optional[SchemaFragment]:
        for param in operation.parameters:
            if param.location == "body":
                return param.schema_
        return None


class OpenAPI3Handler(VersionHandler):
    """OpenAPI 3.x: ``servers``, ``components.schemas``, ``requestBody.content``."""

    dialect = Dialect.OPENAPI_3

    def base_url(self, spec: dict[str, Any]) -> str:
        servers = spec.get("servers")
        if isinstance(servers, list) and servers and isinstance(servers[0], dict):
            url = servers[0].get("url")
            if url is not None:
                return str(url)
        return DEFAULT_SERVER_URL

    def schema_dictionary(self, spec: dict[str, Any]) -> dict[str, Any]:
        components = spec.get("components")
        if not isinstance(components, dict):
            return {}
        schemas = components.get("schemas")
        return schemas if isinstance(schemas, dict) else {}

    def request_body_schema(self, operation: Operation) -> Optional[SchemaFragment]:
        if operation.request_body is None:
            return None
        content = operation.request_body.content
        mime = select_media_type(content)
        if mime is None:
            return None
        return content[mime].schema_


def select_media_type(content: dict[str, Any]) -> Optional[str]:
    """Pick the MIME type to sample from a ``content`` map.

    The first key containing ``"json"`` (case-insensitive) wins; otherwise
    the first declared key. Returns ``None`` for an empty map.
    """
    for mime in content:
        if "json" in mime.lower():
            return mime
    return next(iter(content), None)


_HANDLERS: dict[Dialect, VersionHandler] = {
    Dialect.SWAGGER_2: Swagger2Handler(),
    Dialect.OPENAPI_3: OpenAPI3Handler(),
}


def get_handler(dialect: Dialect) -> VersionHandler:
    """Return the handler for *dialect*."""
    return _HANDLERS[dialect]
