"""Built-in CLI sub-commands for openapi2http.

This package groups the Typer sub-command modules that form the CLI's
top-level command tree:

* :mod:`~openapi2http.commands.convert` -- write a ``.http`` file from an
  API description.
* :mod:`~openapi2http.commands.inspect` -- examine the operations and
  schemas the converter sees.
* :mod:`~openapi2http.commands.config` -- view and modify global settings.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``inspect`` and ``config``) or a plain callback
function registered directly on the root app (for single commands like
``convert``).
"""
