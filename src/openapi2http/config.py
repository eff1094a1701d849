"""Where settings live and how the layers of settings are combined.

Files:

``config.json`` in :func:`get_config_dir`
    The user-wide :class:`~openapi2http.models.GlobalConfig`, written by
    ``openapi2http config set``.
``./openapi2http.json``
    Optional per-repository overrides, a partial ``GlobalConfig`` object.

Crash logs go to :func:`get_data_dir`. Linux and the BSDs follow the XDG base
directory layout; every other platform keeps everything in
``~/.openapi2http``.

:func:`resolve_config` stacks the layers; :func:`atomic_write` is shared with
the converter so that neither a config file nor a generated ``.http`` file is
ever left half written.
"""

from __future__ import annotations

import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Optional

from openapi2http.exceptions import ConfigError
from openapi2http.models import GlobalConfig

APP_DIR_NAME = "openapi2http"
GLOBAL_CONFIG_NAME = "config.json"
PROJECT_CONFIG_NAME = "openapi2http.json"

ENV_EXTENSION = "OPENAPI2HTTP_EXTENSION"
ENV_INDENT = "OPENAPI2HTTP_INDENT"

# environment variable -> key under "output"
_ENV_OUTPUT_KEYS = {ENV_EXTENSION: "extension", ENV_INDENT: "indent"}


def _is_xdg_platform() -> bool:
    return sys.platform.startswith(("linux", "freebsd", "openbsd", "netbsd"))


def _app_dir(xdg_var: str, xdg_default: str, fallback: str = "") -> Path:
    """Return (and create) an application directory.

    With XDG the directory is ``$xdg_var/openapi2http``, where an unset or
    empty variable means ``~/xdg_default``. Without XDG it is
    ``~/.openapi2http/fallback``.
    """
    if _is_xdg_platform():
        root = os.environ.get(xdg_var) or str(Path.home() / xdg_default)
        path = Path(root) / APP_DIR_NAME
    else:
        path = Path.home() / f".{APP_DIR_NAME}"
        if fallback:
            path = path / fallback
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """``$XDG_CONFIG_HOME/openapi2http`` or ``~/.openapi2http``."""
    return _app_dir("XDG_CONFIG_HOME", ".config")


def get_data_dir() -> Path:
    """``$XDG_DATA_HOME/openapi2http`` or ``~/.openapi2http/logs``."""
    return _app_dir("XDG_DATA_HOME", os.path.join(".local", "share"), fallback="logs")


def atomic_write(path: Path, data: str) -> None:
    """Replace the contents of *path* with *data* in one step.

    *data* goes to a temporary sibling of *path* which is synced and then
    renamed over *path*. If anything fails the sibling is removed and *path*
    keeps its old contents. Newlines are written as given.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _read_json_file(path: Path, label: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Invalid {label} config at {path}: {exc}") from exc


def load_global_config() -> GlobalConfig:
    """Read ``config.json``; defaults when the file does not exist.

    Raises:
        ConfigError: If the file is not valid JSON or not a valid config.
    """
    path = get_config_dir() / GLOBAL_CONFIG_NAME
    if not path.is_file():
        return GlobalConfig()
    data = _read_json_file(path, "global")
    try:
        return GlobalConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    text = json.dumps(config.model_dump(mode="json"), indent=2) + "\n"
    atomic_write(get_config_dir() / GLOBAL_CONFIG_NAME, text)


def load_project_config() -> Optional[dict[str, Any]]:
    """Read ``./openapi2http.json`` from the working directory.

    Returns:
        The raw overrides, or ``None`` when there is no such file. Values are
        validated later by :func:`resolve_config`.

    Raises:
        ConfigError: If the file is not a JSON object.
    """
    path = Path.cwd() / PROJECT_CONFIG_NAME
    if not path.is_file():
        return None
    data = _read_json_file(path, "project")
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _overlay(base: dict[str, Any], top: dict[str, Any]) -> dict[str, Any]:
    """Merge *top* into a copy of *base*, recursing into nested objects."""
    result = dict(base)
    for key, value in top.items():
        below = result.get(key)
        if isinstance(below, dict) and isinstance(value, dict):
            value = _overlay(below, value)
        result[key] = value
    return result


def resolve_config(
    cli_extension: Optional[str] = None,
    cli_indent: Optional[int] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Combine every source of settings into the effective configuration.

    Later layers win: defaults, ``config.json``, ``./openapi2http.json``,
    the ``OPENAPI2HTTP_EXTENSION`` / ``OPENAPI2HTTP_INDENT`` environment
    variables, then the ``cli_*`` arguments that are not ``None``. The
    output extension always comes back with a single leading dot; an empty
    one, or one holding a path separator, is a ``ConfigError``.

    Raises:
        ConfigError: If a config file is unreadable or the combined values
            are invalid.
    """
    merged = load_global_config().model_dump(mode="json")
    merged = _overlay(merged, load_project_config() or {})

    output: dict[str, Any] = {}
    for variable, key in _ENV_OUTPUT_KEYS.items():
        if os.environ.get(variable):
            output[key] = os.environ[variable]
    flags = {"extension": cli_extension, "indent": cli_indent, "format": cli_format}
    output.update({key: value for key, value in flags.items() if value is not None})
    if output:
        merged = _overlay(merged, {"output": output})

    try:
        config = GlobalConfig.model_validate(merged)
    except ValueError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc

    name = config.output.extension.lstrip(".")
    if not name or "/" in name or "\\" in name:
        raise ConfigError(f"Invalid output extension: {config.output.extension!r}")
    config.output.extension = "." + name
    return config
