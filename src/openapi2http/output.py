"""Terminal output: data on stdout, diagnostics on stderr.

Generated ``.http`` text, ``inspect`` tables and JSON documents are *data*
and are the only things written to stdout, so that::

    openapi2http convert api.yaml --stdout > api.http

never captures a status line. Everything else (progress notes, warnings,
errors, ``--verbose`` traces) is a *diagnostic* and goes to stderr.

Formatting follows the terminal: Rich styling when stdout is a TTY, plain
text when it is piped. ``NO_COLOR`` (any value), ``TERM=dumb`` and
``--no-color`` turn styling off.

The CLI builds one :class:`OutputManager` per invocation in
:func:`~openapi2http.app.main_callback` and installs it with
:func:`set_output`. Library code reports through the module-level helpers
(:func:`info`, :func:`debug`, ...) instead of passing a manager around.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text


class OutputFormat(str, Enum):
    """How data written to stdout is rendered.

    ``AUTO`` picks ``RICH`` on an interactive, colour-capable terminal and
    ``PLAIN`` everywhere else.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# level -> (plain-text prefix, Rich style of the prefix, Rich style of the message)
_DIAGNOSTIC_STYLES: dict[str, tuple[str, str, str]] = {
    "info": ("", "", ""),
    "success": ("", "", "green"),
    "warning": ("Warning: ", "yellow", ""),
    "error": ("Error: ", "bold red", ""),
    "debug": ("[debug] ", "dim", "dim"),
}


class OutputManager:
    """Routes data and diagnostics to the right stream in the right format.

    Args:
        format: Rendering of stdout data; ``AUTO`` is resolved here.
        no_color: Disable all styling.
        quiet: Drop ``info`` and ``success`` diagnostics.
        verbose: Show ``debug`` diagnostics.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self.no_color = no_color or _color_disabled_by_env()
        self.quiet = quiet
        self.verbose = verbose

        if format == OutputFormat.AUTO:
            format = OutputFormat.RICH if _is_tty() and not self.no_color else OutputFormat.PLAIN
        self.format = format

        self._data_console = Console(
            file=sys.stdout,
            no_color=self.no_color,
            force_terminal=self.format == OutputFormat.RICH,
            highlight=False,
        )
        self._diag_console = Console(
            file=sys.stderr,
            no_color=self.no_color,
            stderr=True,
            highlight=False,
            soft_wrap=True,
        )

    # --- stdout ---

    def print_data(self, text: str) -> None:
        """Write *text* to stdout exactly as given."""
        print(text, file=sys.stdout, flush=True)

    def format_response(self, data: Any) -> None:
        """Render a mapping or list to stdout in the active format."""
        if self.format == OutputFormat.JSON:
            self.print_data(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        elif self.format == OutputFormat.RICH:
            self._data_console.print_json(data=data, default=str)
        elif isinstance(data, dict):
            for key, value in data.items():
                self.print_data(f"{key}\t{_plain_cell(value)}")
        elif isinstance(data, list):
            for item in data:
                cells = item.values() if isinstance(item, dict) else [item]
                self.print_data("\t".join(_plain_cell(cell) for cell in cells))
        else:
            self.print_data(str(data))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Render rows to stdout.

        JSON mode emits one object per row keyed by header, plain mode a
        tab-separated header line followed by the rows. The title is only
        shown by the Rich table.
        """
        if self.format == OutputFormat.JSON:
            self.print_data(
                json.dumps([dict(zip(headers, row)) for row in rows], indent=2, ensure_ascii=False)
            )
            return
        if self.format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
            return

        table = Table(title=title, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            # Text cells are never parsed as markup, so "[x]" survives.
            table.add_row(*(Text(cell) for cell in row))
        self._data_console.print(table)

    # --- stderr ---

    def info(self, message: str) -> None:
        if not self.quiet:
            self._diagnostic("info", message)

    def success(self, message: str) -> None:
        if not self.quiet:
            self._diagnostic("success", message)

    def warning(self, message: str) -> None:
        self._diagnostic("warning", message)

    def error(self, message: str) -> None:
        self._diagnostic("error", message)

    def debug(self, message: str) -> None:
        if self.verbose:
            self._diagnostic("debug", message)

    def _diagnostic(self, level: str, message: str) -> None:
        prefix, prefix_style, message_style = _DIAGNOSTIC_STYLES[level]
        if self.no_color:
            print(f"{prefix}{message}", file=sys.stderr, flush=True)
            return
        self._diag_console.print(Text.assemble((prefix, prefix_style), (message, message_style)))


def _plain_cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _color_disabled_by_env() -> bool:
    """True when ``NO_COLOR`` is set (even empty) or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# --- global manager ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests swap stdout/stderr between runs)."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
