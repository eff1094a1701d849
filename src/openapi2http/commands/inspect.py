"""Inspect commands -- examine an API description before converting it.

Provides the ``openapi2http inspect`` sub-command group with read-only
commands for viewing what the converter sees in a document: its dialect and
base URL, the operations that become request blocks, and the named schemas
that ``$ref`` pointers resolve against.
"""

from __future__ import annotations

from typing import Any

import typer

from openapi2http.output import error, format_response, get_output, info


inspect_app = typer.Typer(no_args_is_help=True)

_SOURCE_HELP = "OpenAPI/Swagger file, URL, or '-' for stdin."


def _load_document(source: str) -> tuple[dict[str, Any], Any]:
    """Load *source* and return the raw document with its version handler.

    Raises:
        typer.Exit: With the error's exit code when the document cannot be
            loaded or classified.
    """
    from openapi2http.config import resolve_config
    from openapi2http.exceptions import Openapi2HttpError
    from openapi2http.parser import (
        check_source_name,
        detect_dialect,
        ensure_paths,
        get_handler,
        load_spec,
    )

    try:
        if source != "-" and not source.startswith(("http://", "https://")):
            check_source_name(source, resolve_config().filters)
        raw = load_spec(source)
        ensure_paths(raw)
        handler = get_handler(detect_dialect(raw))
    except Openapi2HttpError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    return raw, handler


@inspect_app.command("info")
def inspect_info(
    source: str = typer.Argument(..., help=_SOURCE_HELP),
) -> None:
    """Show the dialect, base URL and size of a document.

    Example::

        openapi2http inspect info petstore.yaml
        openapi2http --json inspect info swagger.json
    """
    from openapi2http.parser import extract_operations

    raw, handler = _load_document(source)
    doc_info = raw.get("info") if isinstance(raw.get("info"), dict) else {}

    format_response(
        {
            "title": doc_info.get("title", "-"),
            "version": doc_info.get("version", "-"),
            "dialect": handler.dialect.label,
            "base_url": handler.base_url(raw),
            "operations": len(extract_operations(raw)),
            "schemas": len(handler.schema_dictionary(raw)),
        }
    )


@inspect_app.command("paths")
def inspect_paths(
    source: str = typer.Argument(..., help=_SOURCE_HELP),
) -> None:
    """List the operations that become request blocks, in output order.

    Example::

        openapi2http inspect paths petstore.yaml
    """
    from openapi2http.parser import extract_operations

    raw, handler = _load_document(source)
    operations = extract_operations(raw)

    headers = ["Method", "Path", "Summary", "Body"]
    rows: list[list[str]] = []
    for op in operations:
        has_body = op.is_mutating and handler.request_body_schema(op) is not None
        rows.append([
            op.method.upper(),
            op.path,
            op.summary or "-",
            "schema" if has_body else "",
        ])

    get_output().print_table(headers, rows, title=f"Operations ({len(rows)})")


@inspect_app.command("schemas")
def inspect_schemas(
    source: str = typer.Argument(..., help=_SOURCE_HELP),
) -> None:
    """List the named schemas of a document.

    Shows ``definitions`` (Swagger 2.0) or ``components.schemas``
    (OpenAPI 3.x) with their type and up to five property names.

    Example::

        openapi2http inspect schemas petstore.yaml
    """
    raw, handler = _load_document(source)
    schemas = handler.schema_dictionary(raw)

    if not schemas:
        info("No schemas defined in this document.")
        return

    headers = ["Schema", "Type", "Properties"]
    rows: list[list[str]] = []
    for name, schema in schemas.items():
        schema_type = schema.get("type", "object") if isinstance(schema, dict) else "unknown"
        props_dict = schema.get("properties", {}) if isinstance(schema, dict) else {}
        prop_names = list(props_dict.keys()) if isinstance(props_dict, dict) else []
        props = ", ".join(prop_names[:5])
        if len(prop_names) > 5:
            props += "..."
        rows.append([str(name), str(schema_type), props])

    get_output().print_table(headers, rows, title=f"Schemas ({len(rows)})")
