"""Fixtures shared by the whole suite.

The two documents under ``fixtures/`` cover both dialects: a petstore in
OpenAPI 3.0 YAML and a users API in Swagger 2.0 JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml
from typer.testing import CliRunner

from openapi2http.config import ENV_EXTENSION, ENV_INDENT
from openapi2http.output import OutputFormat, OutputManager, reset_output, set_output

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Drop the installed OutputManager once a test is done.

    A manager holds on to the stdout/stderr it saw when it was built, which
    for CLI tests are CliRunner's capture buffers; they are closed by the
    time the next test writes.
    """
    yield
    reset_output()


@pytest.fixture
def petstore_30_raw() -> dict[str, Any]:
    return yaml.safe_load((FIXTURES_DIR / "petstore_3.0.yaml").read_text(encoding="utf-8"))


@pytest.fixture
def swagger_20_raw() -> dict[str, Any]:
    return json.loads((FIXTURES_DIR / "swagger_2.0.json").read_text(encoding="utf-8"))


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test inside *tmp_path* with its own XDG directories.

    ``config.json`` lands in ``tmp_path/config/openapi2http`` and crash logs
    in ``tmp_path/data/openapi2http``; the ``OPENAPI2HTTP_*`` variables are
    unset and the working directory (where ``openapi2http.json`` is looked
    up) is *tmp_path* itself.
    """
    monkeypatch.setattr("openapi2http.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv(ENV_EXTENSION, raising=False)
    monkeypatch.delenv(ENV_INDENT, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def quiet_output() -> OutputManager:
    """A plain, quiet manager installed as the current output."""
    manager = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(manager)
    yield manager
    reset_output()


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
