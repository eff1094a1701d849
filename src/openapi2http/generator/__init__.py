"""Request block generator -- render operations as ``.http`` text.

This sub-package is the second half of the openapi2http pipeline: given a
decoded document, the matching :class:`~openapi2http.parser.handlers.VersionHandler`
and a :class:`~openapi2http.sampler.SchemaSampler`, it emits the ordered
lines of the output file.

Typical usage::

    from openapi2http.generator import generate
    from openapi2http.parser import detect_dialect, get_handler

    lines = generate(raw, get_handler(detect_dialect(raw)))
    print("\\n".join(lines))

Sub-modules:

* :mod:`~openapi2http.generator.http_file` -- block layout, header/query
  lines and request body synthesis.
"""

from openapi2http.generator.http_file import HttpGenerator, generate

__all__ = ["HttpGenerator", "generate"]
