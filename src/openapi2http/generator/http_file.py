"""Render operations as ``.http`` request blocks.

Each route + method pair becomes one block::

    ###
    # <summary>
    # <description>
    POST https://api.example.com/v1/pets
    X-Request-Id:
    # Query: dryRun (boolean) - Validate only
    Content-Type: application/json

    {
      "name": ""
    }

The summary/description comments, header lines and query comments are
optional. ``POST``, ``PUT`` and ``PATCH`` blocks carry a sample JSON body
when one can be synthesised and always end with a blank line.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Optional

from openapi2http.models import Dialect, MediaContent, Operation, RefSchema
from openapi2http.output import debug
from openapi2http.parser.extractor import extract_operations
from openapi2http.parser.handlers import VersionHandler, select_media_type
from openapi2http.sampler import SchemaSampler

SEPARATOR = "###"
DEFAULT_CONTENT_TYPE = "application/json"


class HttpGenerator:
    """Turns a decoded document into the lines of a ``.http`` file.

    Args:
        indent: Indent width of the pretty-printed JSON bodies.
    """

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def generate(
        self,
        spec: dict[str, Any],
        handler: VersionHandler,
        sampler: Optional[SchemaSampler] = None,
    ) -> list[str]:
        """Generate the output lines for every operation in *spec*.

        Routes and methods are visited in the document's own key order.

        Args:
            spec: The decoded document; ``paths`` must be a mapping.
            handler: The handler matching the document's dialect.
            sampler: The sampler to synthesise bodies with. Defaults to a
                :class:`~openapi2http.sampler.SchemaSampler` for the
                handler's dialect.

        Returns:
            The ordered output lines. A JSON body is a single (multi-line)
            item.
        """
        sampler = sampler or SchemaSampler(handler.dialect)
        base_url = handler.base_url(spec)
        schemas = handler.schema_dictionary(spec)

        lines: list[str] = []
        for operation in extract_operations(spec):
            lines.extend(self.render_operation(operation, base_url, schemas, handler, sampler))
        return lines

    def render_operation(
        self,
        operation: Operation,
        base_url: str,
        schemas: Mapping[str, Any],
        handler: VersionHandler,
        sampler: SchemaSampler,
    ) -> list[str]:
        """Render the block of a single operation."""
        lines = [SEPARATOR]
        if operation.summary:
            lines.append(f"# {operation.summary}")
        if operation.description:
            lines.append(f"# {operation.description}")
        lines.append(f"{operation.method.upper()} {base_url}{operation.path}")

        for header in operation.parameters_in("header"):
            lines.append(f"{header.name}: ")
        for query in operation.parameters_in("query"):
            lines.append(
                f"# Query: {query.name} ({query.type or 'unknown'}) - {query.description or ''}"
            )

        if operation.is_mutating:
            content_type, body = self._request_body(operation, schemas, handler, sampler)
            if isinstance(body, dict) and body:
                lines.append(f"Content-Type: {content_type}")
                lines.append("")
                lines.append(json.dumps(body, indent=self.indent, ensure_ascii=False, default=str))
            else:
                debug(f"No body sample for {operation.method.upper()} {operation.path}")
            lines.append("")

        return lines

    def _request_body(
        self,
        operation: Operation,
        schemas: Mapping[str, Any],
        handler: VersionHandler,
        sampler: SchemaSampler,
    ) -> tuple[str, Any]:
        """Return the content type and sample body of a mutating operation.

        A declared schema is sampled; a top-level ``$ref`` is resolved
        first. An OpenAPI 3.x body without a schema falls back to the
        ``example``/``examples`` of the selected content entry.
        """
        content = operation.request_body.content if operation.request_body else {}
        mime = select_media_type(content) if handler.dialect is Dialect.OPENAPI_3 else None
        content_type = mime or DEFAULT_CONTENT_TYPE

        schema = handler.request_body_schema(operation)
        if schema is not None:
            if isinstance(schema, RefSchema):
                schema = sampler.resolve_ref(schemas, schema.ref)
            return content_type, sampler.sample(schema, schemas)

        if mime is not None:
            return content_type, _example_from_content(content[mime])
        return content_type, {}


def _example_from_content(media: MediaContent) -> Any:
    """Pick an explicit example from a content entry.

    ``example`` wins; otherwise the first entry of ``examples`` (its
    ``value`` when it is an Example Object), otherwise ``{}``.
    """
    if media.example:
        return media.example
    if media.examples:
        first = next(iter(media.examples.values()))
        if isinstance(first, dict) and "value" in first:
            return first["value"]
    return {}


def generate(
    spec: dict[str, Any],
    handler: VersionHandler,
    sampler: Optional[SchemaSampler] = None,
) -> list[str]:
    """Generate ``.http`` lines for *spec*; see :meth:`HttpGenerator.generate`."""
    return HttpGenerator().generate(spec, handler, sampler)
