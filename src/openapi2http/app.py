"""The ``openapi2http`` command line.

The root :data:`app` carries the global options (output format, colour,
verbosity, ``--force``) and three sub-commands:

``convert``
    Write a ``.http`` file for an OpenAPI 3.x / Swagger 2.0 document.
``inspect``
    Show what the converter sees in a document.
``config``
    Read and change the user-wide settings.

:func:`main` is the console-script entry point. Commands report expected
failures themselves and exit with the code of the
:class:`~openapi2http.exceptions.Openapi2HttpError` they caught; :func:`main`
is the last line of defence for anything that escapes them.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any

import typer

from openapi2http import __version__
from openapi2http.commands.config import config_app
from openapi2http.commands.convert import convert_command
from openapi2http.commands.inspect import inspect_app
from openapi2http.exit_codes import EXIT_GENERIC_FAILURE
from openapi2http.output import OutputFormat, OutputManager, set_output

EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="openapi2http",
    help="Convert OpenAPI 3.x / Swagger 2.0 documents into .http request files.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)
app.command("convert")(convert_command)
app.add_typer(inspect_app, name="inspect", help="Inspect an API description.")
app.add_typer(config_app, name="config", help="View and change settings.")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"openapi2http {__version__}")
        raise typer.Exit()


def _configured_format() -> OutputFormat:
    """The ``output.format`` setting, or ``AUTO`` when the config is unreadable.

    A broken config file is reported by the command that needs it, with its
    own exit code, so it is not an error at this point.
    """
    from openapi2http.config import resolve_config
    from openapi2http.exceptions import ConfigError

    try:
        return OutputFormat(resolve_config().output.format)
    except ConfigError:
        return OutputFormat.AUTO


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_print_version, is_eager=True, help="Show version and exit."
    ),
    json_output: bool = typer.Option(False, "--json", help="Render data as JSON."),
    plain_output: bool = typer.Option(False, "--plain", help="Render data as plain text."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colour output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print data and errors."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print debug traces."),
    force: bool = typer.Option(False, "--force", "-f", help="Do not ask for confirmation."),
) -> None:
    """Install the output manager for this invocation.

    ``--json`` and ``--plain`` win over the ``output.format`` setting.
    """
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = _configured_format()

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    ctx.obj = {"force": force, "verbose": verbose}


def _on_sigint(signum: int, frame: Any) -> None:  # noqa: ANN401
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def _write_crash_log(exc: BaseException) -> Path:
    """Save the traceback of *exc* under the data directory."""
    from openapi2http.config import get_data_dir

    log_dir = get_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.write_text("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
    return log_path


def main() -> None:
    """Console-script entry point.

    Raises:
        SystemExit: Always; with the Typer exit code, the code of an escaped
            :class:`~openapi2http.exceptions.Openapi2HttpError`, 130 on
            Ctrl-C or 1 after writing a crash log.
    """
    from openapi2http.exceptions import Openapi2HttpError
    from openapi2http.output import error

    signal.signal(signal.SIGINT, _on_sigint)
    try:
        app()
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Openapi2HttpError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error. Debug log: {_write_crash_log(exc)}")
        sys.exit(EXIT_GENERIC_FAILURE)
