"""Read API descriptions from disk, the network or stdin.

A *source* is a local path, an ``http(s)://`` URL or ``-`` for stdin.
:func:`load_spec` reads it and :func:`decode_document` turns the text into a
mapping. The decoder follows the format the source announces (file or URL
suffix, HTTP ``content-type``); when nothing is announced JSON is tried
before YAML.

:func:`check_source_name` is the cheap gate in front of all this: it turns
away ``package.json``, ``docker-compose.yml`` and other files that are
plainly not API descriptions before they are opened.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from openapi2http.exceptions import SpecParseError, UnsupportedFileError
from openapi2http.models import FilterConfig
from openapi2http.output import debug

FETCH_TIMEOUT = 30.0

_SUFFIX_FORMATS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


def check_source_name(path: str | Path, filters: Optional[FilterConfig] = None) -> None:
    """Turn away files that are not API descriptions.

    The lower-cased file name must not equal an entry of
    ``filters.ignored_files`` nor contain an entry of
    ``filters.ignored_keywords``, and its suffix must be listed in
    ``filters.extensions``. Directories in *path* are not looked at.

    Raises:
        UnsupportedFileError: If the file is turned away.
    """
    filters = filters or FilterConfig()
    name = Path(path).name
    lowered = name.lower()

    if lowered in (entry.lower() for entry in filters.ignored_files):
        raise UnsupportedFileError(f"{name} is not an OpenAPI/Swagger file.")
    if any(keyword.lower() in lowered for keyword in filters.ignored_keywords):
        raise UnsupportedFileError(f"{name} is not an OpenAPI/Swagger file.")

    if Path(lowered).suffix not in (ext.lower() for ext in filters.extensions):
        raise UnsupportedFileError(
            f"{name} must have one of these extensions: {', '.join(filters.extensions)}"
        )


def load_spec(source: str) -> dict[str, Any]:
    """Read and decode the document named by *source*.

    Args:
        source: A local path, an ``http(s)://`` URL, or ``-`` for stdin.

    Returns:
        The decoded top-level mapping.

    Raises:
        SpecParseError: If the source cannot be read or decoded.
    """
    if source == "-":
        text, fmt = _read_stdin(), None
    elif source.startswith(("http://", "https://")):
        text, fmt = _fetch(source)
    else:
        text, fmt = _read_file(Path(source))
    return decode_document(text, fmt)


def _read_stdin() -> str:
    try:
        text = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Cannot read stdin: {exc}") from exc
    if not text.strip():
        raise SpecParseError("No input on stdin")
    return text


def _read_file(path: Path) -> tuple[str, Optional[str]]:
    """Return the text of *path* and the format its suffix announces."""
    if not path.is_file():
        raise SpecParseError(f"No such file: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecParseError(f"Cannot read {path}: {exc}") from exc
    if not text.strip():
        raise SpecParseError(f"{path} is empty")
    return text, _SUFFIX_FORMATS.get(path.suffix.lower())


def _fetch(url: str) -> tuple[str, Optional[str]]:
    """Download *url* and return its text with the announced format.

    The ``content-type`` header decides the format; failing that, the
    suffix of the URL path.
    """
    debug(f"GET {url}")
    try:
        response = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(f"Could not fetch {url}: HTTP {exc.response.status_code}") from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Could not fetch {url}: {exc}") from exc

    media_type = response.headers.get("content-type", "").lower()
    if "json" in media_type:
        fmt: Optional[str] = "json"
    elif "yaml" in media_type or "yml" in media_type:
        fmt = "yaml"
    else:
        fmt = _SUFFIX_FORMATS.get(Path(response.url.path).suffix.lower())

    if not response.text.strip():
        raise SpecParseError(f"{url} returned an empty document")
    return response.text, fmt


def _decode_json(text: str) -> Any:
    return json.loads(text)


def _decode_yaml(text: str) -> Any:
    return yaml.safe_load(text)


_DECODERS: dict[str, Callable[[str], Any]] = {"JSON": _decode_json, "YAML": _decode_yaml}


def decode_document(text: str, fmt: Optional[str] = None) -> dict[str, Any]:
    """Decode *text* as JSON or YAML.

    Args:
        text: The raw document.
        fmt: ``"json"`` or ``"yaml"`` to use only that decoder; ``None``
            tries JSON, then YAML.

    Returns:
        The decoded top-level mapping.

    Raises:
        SpecParseError: If no decoder accepts *text*, or the document is not
            a mapping.
    """
    labels = [fmt.upper()] if fmt else ["JSON", "YAML"]
    failures: list[str] = []

    for label in labels:
        try:
            document = _DECODERS[label](text)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            failures.append(f"{label}: {exc}")
            continue
        if not isinstance(document, dict):
            found = "an empty document" if document is None else type(document).__name__
            raise SpecParseError(f"Expected a JSON/YAML object at the top level, got {found}")
        return document

    if len(failures) == 1:
        raise SpecParseError(f"Invalid {failures[0]}")
    raise SpecParseError("Not valid JSON or YAML\n  " + "\n  ".join(failures))
