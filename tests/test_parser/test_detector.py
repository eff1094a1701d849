"""Tests for openapi2http.parser.detector."""

from __future__ import annotations

from typing import Any

import pytest

from openapi2http.exceptions import MissingPathsError, UnrecognizedVersionError
from openapi2http.models import Dialect
from openapi2http.parser.detector import detect_dialect, ensure_paths


class TestEnsurePaths:
    """The document must carry a ``paths`` mapping."""

    def test_returns_paths(self) -> None:
        assert ensure_paths({"paths": {"/a": {}}}) == {"/a": {}}

    def test_empty_paths_is_valid(self) -> None:
        assert ensure_paths({"paths": {}}) == {}

    @pytest.mark.parametrize(
        "spec",
        [{}, {"paths": None}, {"paths": []}, {"paths": "nope"}],
        ids=["missing", "null", "list", "string"],
    )
    def test_rejects_missing_or_invalid_paths(self, spec: dict[str, Any]) -> None:
        with pytest.raises(MissingPathsError, match='no valid "paths" object') as exc_info:
            ensure_paths(spec)
        assert exc_info.value.exit_code == 9


class TestDetectDialect:
    """Version signatures map to exactly one dialect."""

    @pytest.mark.parametrize(
        "spec, expected",
        [
            ({"openapi": "3.0.3"}, Dialect.OPENAPI_3),
            ({"openapi": "3.1.0"}, Dialect.OPENAPI_3),
            ({"swagger": "2.0"}, Dialect.SWAGGER_2),
            ({"openapi": 3.0}, Dialect.OPENAPI_3),
            ({"swagger": 2.0}, Dialect.SWAGGER_2),
            ({"info": {"version": "3.2"}}, Dialect.OPENAPI_3),
            ({"info": {"version": "2.5.1"}}, Dialect.SWAGGER_2),
        ],
    )
    def test_detects(self, spec: dict[str, Any], expected: Dialect) -> None:
        assert detect_dialect(spec) is expected

    def test_openapi_key_takes_precedence(self) -> None:
        assert detect_dialect({"openapi": "3.0.0", "swagger": "2.0"}) is Dialect.OPENAPI_3

    def test_null_openapi_falls_through_to_swagger(self) -> None:
        assert detect_dialect({"openapi": None, "swagger": "2.0"}) is Dialect.SWAGGER_2

    def test_info_version_only_consulted_without_signature_keys(self) -> None:
        spec = {"swagger": "2.0", "info": {"version": "3.0.0"}}
        assert detect_dialect(spec) is Dialect.SWAGGER_2

    @pytest.mark.parametrize(
        "spec",
        [
            {},
            {"openapi": "1.0"},
            {"swagger": "1.2"},
            {"info": {"version": "1.0.0"}},
            {"openapi": 0},
        ],
    )
    def test_unrecognized(self, spec: dict[str, Any]) -> None:
        with pytest.raises(UnrecognizedVersionError, match="Cannot detect") as exc_info:
            detect_dialect(spec)
        assert exc_info.value.exit_code == 11

    def test_fixtures(
        self, petstore_30_raw: dict[str, Any], swagger_20_raw: dict[str, Any]
    ) -> None:
        assert detect_dialect(petstore_30_raw) is Dialect.OPENAPI_3
        assert detect_dialect(swagger_20_raw) is Dialect.SWAGGER_2
