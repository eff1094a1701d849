"""Classify a decoded document as Swagger 2.0 or OpenAPI 3.x.

Two cheap structural checks run before any output is produced:

* :func:`ensure_paths` -- the document must carry a ``paths`` mapping.
* :func:`detect_dialect` -- the version signature must identify a dialect.

Neither validates the document against the OpenAPI meta-schema; they only
establish enough structure for the generator to proceed.
"""

from __future__ import annotations

from typing import Any

from openapi2http.exceptions import MissingPathsError, UnrecognizedVersionError
from openapi2http.models import Dialect


def ensure_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Return the document's ``paths`` mapping.

    Raises:
        MissingPathsError: If ``paths`` is absent or not a mapping.
    """
    paths = spec.get("paths") if isinstance(spec, dict) else None
    if not isinstance(paths, dict):
        raise MissingPathsError('OpenAPI file has no valid "paths" object.')
    return paths


def detect_dialect(spec: dict[str, Any]) -> Dialect:
    """Detect the dialect of a decoded API description.

    The version is read from ``openapi``, then ``swagger``, then
    ``info.version``; the first non-null value wins. A string version
    starting with ``"3"`` means OpenAPI 3.x and one starting with ``"2"``
    means Swagger 2.0. A non-string version (YAML turns ``openapi: 3.0``
    into a float) falls back to key presence: a truthy ``openapi`` key
    means OpenAPI 3.x, a truthy ``swagger`` key Swagger 2.0.

    Args:
        spec: The decoded document.

    Returns:
        The detected :class:`~openapi2http.models.Dialect`.

    Raises:
        UnrecognizedVersionError: If neither dialect is identified.

    Example::

        detect_dialect({"openapi": "3.0.3", "paths": {}})  # Dialect.OPENAPI_3
        detect_dialect({"swagger": 2.0, "paths": {}})      # Dialect.SWAGGER_2
    """
    info = spec.get("info")
    candidates = (
        spec.get("openapi"),
        spec.get("swagger"),
        info.get("version") if isinstance(info, dict) else None,
    )
    version = next((value for value in candidates if value is not None), "")

    if isinstance(version, str):
        is_v3 = version.startswith("3")
        is_v2 = version.startswith("2")
    else:
        is_v3 = bool(spec.get("openapi"))
        is_v2 = bool(spec.get("swagger"))

    if is_v3:
        return Dialect.OPENAPI_3
    if is_v2:
        return Dialect.SWAGGER_2
    raise UnrecognizedVersionError("Cannot detect OpenAPI/Swagger version.")
