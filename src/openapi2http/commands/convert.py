"""Convert command -- turn an API description into a ``.http`` file.

Implements the ``openapi2http convert`` top-level command: reject files that
are not API descriptions, decode the document, detect its dialect, generate
the request blocks and write them next to the source (or to ``--output``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from openapi2http.output import debug, error, info, print_data, success, warning


def convert_command(
    source: str = typer.Argument(
        ..., help="OpenAPI/Swagger file (.json, .yaml, .yml), URL, or '-' for stdin."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Destination file (default: source with .http extension)."
    ),
    to_stdout: bool = typer.Option(
        False, "--stdout", help="Print the generated text instead of writing a file."
    ),
    extension: Optional[str] = typer.Option(
        None, "--extension", "-e", help="Extension of the generated file."
    ),
    indent: Optional[int] = typer.Option(
        None, "--indent", min=0, help="Indent width of JSON sample bodies."
    ),
) -> None:
    """Convert an OpenAPI 3.x / Swagger 2.0 document into a .http file.

    Args:
        source: Local file path, URL, or ``-`` for stdin.
        output: Explicit destination path.
        to_stdout: Print instead of writing.
        extension: Override of the output extension.
        indent: Override of the JSON body indent.

    Raises:
        typer.Exit: With the error's exit code when the conversion fails.
            Combining ``--stdout`` with ``--output`` exits with code 2.
            An existing destination file is overwritten.

    Example::

        openapi2http convert petstore.yaml
        openapi2http convert swagger.json -o requests/api.http
        curl -s https://api.example.com/openapi.json | openapi2http convert - --stdout
    """
    from openapi2http.config import atomic_write, resolve_config
    from openapi2http.converter import convert_file
    from openapi2http.exceptions import InvalidUsageError, Openapi2HttpError

    try:
        if to_stdout and output is not None:
            raise InvalidUsageError("--stdout and --output cannot be used together.")
        config = resolve_config(cli_extension=extension, cli_indent=indent)
        result, destination = convert_file(
            source, output=output, config=config, write=False
        )
    except Openapi2HttpError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(
        f"{result.dialect.label} document, {len(result.operations)} operations, "
        f"base URL {result.base_url}"
    )
    if not result.operations:
        warning("The document declares no operations; the output is empty.")

    if to_stdout:
        print_data(result.text)
        return

    atomic_write(destination, result.text)
    debug(f"Wrote {len(result.lines)} lines")
    success(f"Generated .http file at {destination}")
