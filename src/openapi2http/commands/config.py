"""``openapi2http config`` -- view and change the user-wide settings.

The settings live in :class:`~openapi2http.models.GlobalConfig`: the
extension and JSON indent of generated files, the rendering of ``inspect``
output and the file name filters that keep ``convert`` away from
``package.json`` and friends.
"""

from __future__ import annotations

from typing import Any

import typer

from openapi2http.exit_codes import EXIT_INVALID_USAGE
from openapi2http.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective settings.

    The values shown already include ``./openapi2http.json`` and the
    ``OPENAPI2HTTP_*`` environment variables.

    Example::

        openapi2http config show
        openapi2http --json config show
    """
    from openapi2http.config import get_config_dir, resolve_config
    from openapi2http.exceptions import ConfigError

    try:
        config = resolve_config()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


def _coerce(raw: str, current: Any) -> Any:
    """Convert the command-line string *raw* to the type of *current*.

    Raises:
        ValueError: If an integer setting gets a non-integer value.
    """
    if isinstance(current, bool):
        return raw.lower() in ("true", "1", "yes", "on")
    if isinstance(current, int):
        return int(raw)
    if isinstance(current, list):
        return [item.strip() for item in raw.split(",") if item.strip()]
    return raw


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Dotted setting name, e.g. 'output.extension'."),
    value: str = typer.Argument(help="New value. Lists take comma-separated items."),
) -> None:
    """Change one setting in the global config file.

    Exits with code 2 for an unknown key or a value the setting rejects.

    Example::

        openapi2http config set output.extension .rest
        openapi2http config set output.indent 4
        openapi2http config set filters.ignored_keywords config,settings
    """
    from pydantic import ValidationError

    from openapi2http.config import load_global_config, save_global_config
    from openapi2http.models import GlobalConfig

    data = load_global_config().model_dump(mode="json")

    *parents, leaf = key.split(".")
    section = data
    for part in parents:
        section = section.get(part)
        if not isinstance(section, dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=EXIT_INVALID_USAGE)
    if leaf not in section or isinstance(section[leaf], dict):
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    try:
        section[leaf] = _coerce(value, section[leaf])
        updated = GlobalConfig.model_validate(data)
    except (ValueError, ValidationError) as exc:
        error(f"Invalid value for {key}: {exc}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    save_global_config(updated)
    success(f"Set {key} = {section[leaf]}")


@config_app.command("reset")
def config_reset(ctx: typer.Context) -> None:
    """Restore the default settings.

    Asks first unless the root ``--force`` option is given.

    Example::

        openapi2http --force config reset
    """
    from openapi2http.config import save_global_config
    from openapi2http.models import GlobalConfig

    if not (ctx.obj or {}).get("force") and not typer.confirm("Reset all settings to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
