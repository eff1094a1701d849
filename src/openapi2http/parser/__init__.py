"""Document parser -- load, classify, and extract operations.

This sub-package turns a raw API description (JSON or YAML, local file,
remote URL or stdin) into the pieces the generator consumes.

Typical usage::

    from openapi2http.parser import load_spec, detect_dialect, get_handler

    raw = load_spec("petstore.yaml")
    handler = get_handler(detect_dialect(raw))
    print(handler.base_url(raw))

Sub-modules:

* :mod:`~openapi2http.parser.loader` -- I/O layer (URL, file, stdin), file
  name filtering and JSON/YAML decoding.
* :mod:`~openapi2http.parser.detector` -- ``paths`` check and dialect
  detection.
* :mod:`~openapi2http.parser.handlers` -- Swagger 2.0 / OpenAPI 3.x
  lookups of base URL, schema registry and request body schema.
* :mod:`~openapi2http.parser.extractor` -- Walks ``paths`` and produces
  :class:`~openapi2http.models.Operation` objects.
"""

from openapi2http.parser.detector import detect_dialect, ensure_paths
from openapi2http.parser.extractor import extract_operations
from openapi2http.parser.handlers import VersionHandler, get_handler
from openapi2http.parser.loader import check_source_name, load_spec

__all__ = [
    "check_source_name",
    "load_spec",
    "detect_dialect",
    "ensure_paths",
    "extract_operations",
    "VersionHandler",
    "get_handler",
]
