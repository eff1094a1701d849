"""End-to-end conversion of an API description into a ``.http`` file.

:func:`convert_document` is the pure core: decoded document in,
:class:`~openapi2http.models.ConversionResult` out. :func:`convert_file` wraps
it with the I/O around it -- file name filtering, decoding, choosing the
destination name and writing the result -- and is what the CLI calls.

Every failure is raised as an :class:`~openapi2http.exceptions.Openapi2HttpError`
subclass before any output is written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from openapi2http.config import atomic_write
from openapi2http.generator import HttpGenerator
from openapi2http.models import ConversionResult, GlobalConfig
from openapi2http.output import debug
from openapi2http.parser import (
    check_source_name,
    detect_dialect,
    ensure_paths,
    extract_operations,
    get_handler,
    load_spec,
)
from openapi2http.sampler import SchemaSampler

_SOURCE_SUFFIXES = (".json", ".yaml", ".yml")


def convert_document(spec: dict[str, Any], indent: int = 2) -> ConversionResult:
    """Convert a decoded document into ``.http`` lines.

    Args:
        spec: The decoded OpenAPI 3.x or Swagger 2.0 document.
        indent: Indent width of the JSON sample bodies.

    Returns:
        The detected dialect, base URL, operations and output lines.

    Raises:
        MissingPathsError: If ``paths`` is missing or not a mapping.
        UnrecognizedVersionError: If the dialect cannot be detected.
    """
    ensure_paths(spec)
    dialect = detect_dialect(spec)
    handler = get_handler(dialect)
    debug(f"Detected {dialect.label}")

    lines = HttpGenerator(indent=indent).generate(spec, handler, SchemaSampler(dialect))
    return ConversionResult(
        dialect=dialect,
        base_url=handler.base_url(spec),
        operations=extract_operations(spec),
        lines=lines,
    )


def output_path_for(source: str | Path, extension: str = ".http") -> Path:
    """Return the destination path for *source*.

    A ``.json``/``.yaml``/``.yml`` suffix (any case) is replaced with
    *extension*; any other name gets *extension* appended.

    Example::

        output_path_for("api/petstore.YAML")  # Path("api/petstore.http")
    """
    path = Path(source)
    if path.suffix.lower() in _SOURCE_SUFFIXES:
        return path.with_suffix(extension)
    return path.with_name(path.name + extension)


def convert_file(
    source: str,
    output: Optional[Path] = None,
    config: Optional[GlobalConfig] = None,
    write: bool = True,
) -> tuple[ConversionResult, Path]:
    """Convert the document at *source* and write the ``.http`` file.

    Args:
        source: A local file path, an ``http(s)://`` URL, or ``-`` for stdin.
        output: Destination path. Defaults to the source path with its
            extension replaced (or ``./<name>.http`` for URLs and stdin).
        config: Effective configuration; defaults to built-in defaults.
        write: When ``False``, the result is returned without touching disk.

    Returns:
        The conversion result and the destination path.

    Raises:
        UnsupportedFileError: If a local source is not an API description.
        SpecParseError: If the document cannot be read or decoded.
        MissingPathsError: If the document lacks ``paths``.
        UnrecognizedVersionError: If the dialect cannot be detected.
    """
    config = config or GlobalConfig()
    is_local = source != "-" and not source.startswith(("http://", "https://"))

    if is_local:
        check_source_name(source, config.filters)

    spec = load_spec(source)
    result = convert_document(spec, indent=config.output.indent)

    if output is None:
        output = output_path_for(_default_stem(source, is_local), config.output.extension)

    if write:
        atomic_write(output, result.text)
        debug(f"Wrote {len(result.lines)} lines to {output}")
    return result, output


def _default_stem(source: str, is_local: bool) -> str:
    if is_local:
        return source
    if source == "-":
        return "openapi"
    name = source.rstrip("/").rsplit("/", 1)[-1].split("?", 1)[0]
    return name or "openapi"
