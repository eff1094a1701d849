"""Extract operations from a decoded OpenAPI/Swagger document.

This module walks the ``paths`` object and builds one
:class:`~openapi2http.models.Operation` per route + HTTP method, keeping the
document's own key order for both. Schemas are parsed into fragments but
``$ref`` pointers are left in place; resolution is the sampler's job.

The single public entry point is :func:`extract_operations`.

Parameters declared on a path item apply to each of its operations; an
operation entry with the same ``name`` and ``in`` replaces the path one.
"""

from __future__ import annotations

from typing import Any

from openapi2http.models import (
    MediaContent,
    Operation,
    Parameter,
    RequestBody,
    parse_schema,
)

# HTTP methods recognized by OpenAPI path items
HTTP_METHODS = frozenset(
    {"get", "put", "post", "delete", "options", "head", "patch", "trace"}
)


def extract_operations(spec: dict[str, Any]) -> list[Operation]:
    """Extract all operations from the document's ``paths`` object.

    Path-item keys that are not HTTP methods (``parameters``, ``summary``,
    ``servers``, ``$ref``, ``x-*`` extensions) are not operations and are
    skipped, as are non-mapping path items and operations.

    Args:
        spec: The decoded document. ``paths`` is assumed to be a mapping
            (see :func:`~openapi2http.parser.detector.ensure_paths`).

    Returns:
        The operations in document order.
    """
    operations: list[Operation] = []

    for path, path_item in spec.get("paths", {}).items():
        if not isinstance(path_item, dict):
            continue

        path_params = _as_list(path_item.get("parameters"))

        for method, operation in path_item.items():
            if not isinstance(method, str) or method.lower() not in HTTP_METHODS:
                continue
            if not isinstance(operation, dict):
                continue

            merged_params = _merge_parameters(
                path_params, _as_list(operation.get("parameters"))
            )

            operations.append(
                Operation(
                    path=str(path),
                    method=method,
                    summary=_text(operation.get("summary")),
                    description=_text(operation.get("description")),
                    parameters=[_extract_parameter(p) for p in merged_params],
                    request_body=_extract_request_body(operation.get("requestBody")),
                )
            )

    return operations


def _as_list(value: Any) -> list[dict[str, Any]]:
    """Keep only the mapping entries of a ``parameters`` array."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _text(value: Any) -> str | None:
    """Normalise an optional descriptive field; empty values count as absent."""
    if value is None or value == "":
        return None
    return str(value)


def _merge_parameters(
    path_params: list[dict[str, Any]],
    op_params: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters.

    Operation-level parameters override path-level parameters with the same
    name and location (``in`` field), per the OpenAPI spec.

    Args:
        path_params: Parameters defined at the path level.
        op_params: Parameters defined at the operation level.

    Returns:
        A merged list of parameter dicts.
    """
    op_keys = {(param.get("name", ""), param.get("in", "")) for param in op_params}

    merged = [
        param
        for param in path_params
        if (param.get("name", ""), param.get("in", "")) not in op_keys
    ]
    merged.extend(op_params)
    return merged


def _extract_parameter(param: dict[str, Any]) -> Parameter:
    """Convert a raw parameter dict into a :class:`~openapi2http.models.Parameter`.

    ``type`` is the parameter's own ``type`` keyword (Swagger 2.0 style);
    ``schema`` is only meaningful for Swagger 2.0 body parameters.
    """
    declared_type = param.get("type")
    return Parameter(
        name=str(param.get("name", "")),
        location=str(param.get("in", "")),
        type=str(declared_type) if declared_type is not None else None,
        description=_text(param.get("description")),
        schema=parse_schema(param.get("schema")),
    )


def _extract_request_body(body: Any) -> RequestBody | None:
    """Extract an OpenAPI 3.x ``requestBody``.

    Returns:
        A :class:`~openapi2http.models.RequestBody` whose ``content`` keeps
        the declared MIME order, or ``None`` when the operation declares no
        usable ``content`` map.
    """
    if not isinstance(body, dict):
        return None
    content = body.get("content")
    if not isinstance(content, dict):
        return None

    return RequestBody(
        content={
            str(mime): _extract_media_content(entry) for mime, entry in content.items()
        }
    )


def _extract_media_content(entry: Any) -> MediaContent:
    if not isinstance(entry, dict):
        return MediaContent()
    examples = entry.get("examples")
    return MediaContent(
        schema=parse_schema(entry.get("schema")),
        example=entry.get("example"),
        examples=examples if isinstance(examples, dict) else None,
    )
