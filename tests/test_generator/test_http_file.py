"""Tests for openapi2http.generator.http_file."""

from __future__ import annotations

import json
from typing import Any

import pytest

from openapi2http.generator import HttpGenerator, generate
from openapi2http.models import Dialect
from openapi2http.parser.handlers import OpenAPI3Handler, Swagger2Handler
from openapi2http.sampler import SchemaSampler

V3 = OpenAPI3Handler()
V2 = Swagger2Handler()


def _blocks(lines: list[str]) -> list[list[str]]:
    """Split output lines into blocks, each starting with the separator."""
    blocks: list[list[str]] = []
    for line in lines:
        if line == "###":
            blocks.append([])
        blocks[-1].append(line)
    return blocks


# ---------------------------------------------------------------------------
# Block layout
# ---------------------------------------------------------------------------


class TestBlockLayout:
    """Shape of a single request block."""

    def test_empty_paths_produce_no_lines(self) -> None:
        assert generate({"paths": {}}, V3) == []

    def test_minimal_get(self) -> None:
        spec = {"openapi": "3.0.0", "paths": {"/x": {"get": {}}}}
        assert generate(spec, V3) == ["###", "GET http://localhost:5000/x"]

    def test_summary_and_description_comments(self) -> None:
        spec = {
            "paths": {"/x": {"delete": {"summary": "Remove", "description": "Gone for good"}}}
        }
        assert generate(spec, V3) == [
            "###",
            "# Remove",
            "# Gone for good",
            "DELETE http://localhost:5000/x",
        ]

    def test_headers_then_query_comments(self) -> None:
        spec = {
            "paths": {
                "/x": {
                    "get": {
                        "parameters": [
                            {"name": "limit", "in": "query", "type": "integer", "description": "Max"},
                            {"name": "X-Trace", "in": "header"},
                            {"name": "cursor", "in": "query", "schema": {"type": "string"}},
                            {"name": "id", "in": "path"},
                            {"name": "sid", "in": "cookie"},
                        ]
                    }
                }
            }
        }
        assert generate(spec, V3) == [
            "###",
            "GET http://localhost:5000/x",
            "X-Trace: ",
            "# Query: limit (integer) - Max",
            "# Query: cursor (unknown) - ",
        ]

    def test_post_with_empty_sample_has_no_content_type(self) -> None:
        spec = {"paths": {"/x": {"post": {}}}}
        assert generate(spec, V3) == ["###", "POST http://localhost:5000/x", ""]

    @pytest.mark.parametrize("method", ["post", "put", "patch"])
    def test_mutating_blocks_end_blank(self, method: str) -> None:
        lines = generate({"paths": {"/x": {method: {}}}}, V2)
        assert lines[-1] == ""

    @pytest.mark.parametrize("method", ["get", "delete", "head", "options", "trace"])
    def test_non_mutating_blocks_have_no_body(self, method: str) -> None:
        spec = {
            "paths": {
                "/x": {
                    method: {
                        "requestBody": {
                            "content": {"application/json": {"example": {"a": 1}}}
                        }
                    }
                }
            }
        }
        assert generate(spec, V3) == ["###", f"{method.upper()} http://localhost:5000/x"]

    def test_one_block_per_operation(self) -> None:
        spec = {"paths": {"/a": {"get": {}, "post": {}}, "/b": {"put": {}}}}
        blocks = _blocks(generate(spec, V3))
        assert [block[1] for block in blocks] == [
            "GET http://localhost:5000/a",
            "POST http://localhost:5000/a",
            "PUT http://localhost:5000/b",
        ]


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


class TestRequestBodies:
    """Body synthesis for POST/PUT/PATCH."""

    def test_inline_v3_schema(self) -> None:
        spec = {
            "paths": {
                "/x": {
                    "post": {
                        "requestBody": {
                            "content": {
                                "application/json": {
                                    "schema": {
                                        "type": "object",
                                        "properties": {
                                            "id": {"type": "integer"},
                                            "name": {"type": "string"},
                                        },
                                    }
                                }
                            }
                        }
                    }
                }
            }
        }
        assert generate(spec, V3) == [
            "###",
            "POST http://localhost:5000/x",
            "Content-Type: application/json",
            "",
            '{\n  "id": 0,\n  "name": ""\n}',
            "",
        ]

    def test_top_level_ref_expands_one_extra_level(self) -> None:
        spec = {
            "paths": {
                "/n": {
                    "post": {
                        "requestBody": {
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/Node"}
                                }
                            }
                        }
                    }
                }
            },
            "components": {
                "schemas": {
                    "Node": {
                        "type": "object",
                        "properties": {"next": {"$ref": "#/components/schemas/Node"}},
                    }
                }
            },
        }
        lines = generate(spec, V3)
        assert json.loads(lines[4]) == {"next": {"next": {}}}

    def test_content_type_is_selected_mime(self) -> None:
        spec = {
            "paths": {
                "/x": {
                    "put": {
                        "requestBody": {
                            "content": {
                                "application/merge-patch+json": {
                                    "schema": {
                                        "type": "object",
                                        "properties": {"a": {"type": "boolean"}},
                                    }
                                }
                            }
                        }
                    }
                }
            }
        }
        lines = generate(spec, V3)
        assert lines[2] == "Content-Type: application/merge-patch+json"
        assert json.loads(lines[4]) == {"a": False}

    def test_example_fallback_without_schema(self) -> None:
        spec = {
            "paths": {
                "/x": {
                    "post": {
                        "requestBody": {
                            "content": {"application/json": {"example": {"name": "Rex"}}}
                        }
                    }
                }
            }
        }
        lines = generate(spec, V3)
        assert lines[2] == "Content-Type: application/json"
        assert json.loads(lines[4]) == {"name": "Rex"}

    def test_examples_fallback_uses_first_value(self) -> None:
        spec = {
            "paths": {
                "/x": {
                    "post": {
                        "requestBody": {
                            "content": {
                                "application/json": {
                                    "examples": {
                                        "first": {"value": {"n": 1}},
                                        "second": {"value": {"n": 2}},
                                    }
                                }
                            }
                        }
                    }
                }
            }
        }
        assert json.loads(generate(spec, V3)[4]) == {"n": 1}

    def test_examples_without_value_give_no_body(self) -> None:
        spec = {
            "paths": {
                "/x": {
                    "post": {
                        "requestBody": {
                            "content": {
                                "application/json": {
                                    "examples": {"ext": {"externalValue": "http://x/ex.json"}}
                                }
                            }
                        }
                    }
                }
            }
        }
        assert generate(spec, V3) == ["###", "POST http://localhost:5000/x", ""]

    def test_non_object_sample_gives_no_body(self) -> None:
        spec = {
            "paths": {
                "/x": {
                    "post": {
                        "requestBody": {
                            "content": {
                                "application/json": {
                                    "schema": {"type": "array", "items": {"type": "string"}}
                                }
                            }
                        }
                    }
                }
            }
        }
        assert generate(spec, V3) == ["###", "POST http://localhost:5000/x", ""]

    def test_swagger2_body_parameter(self) -> None:
        spec = {
            "paths": {
                "/x": {
                    "post": {
                        "parameters": [
                            {
                                "name": "body",
                                "in": "body",
                                "schema": {"$ref": "#/definitions/Pet"},
                            }
                        ]
                    }
                }
            },
            "definitions": {
                "Pet": {"type": "object", "properties": {"name": {"type": "string"}}}
            },
        }
        assert generate(spec, V2) == [
            "###",
            "POST http://localhost/x",
            "Content-Type: application/json",
            "",
            '{\n  "name": ""\n}',
            "",
        ]

    def test_swagger2_ignores_request_body(self) -> None:
        spec = {
            "paths": {
                "/x": {
                    "post": {
                        "requestBody": {
                            "content": {"application/json": {"example": {"a": 1}}}
                        }
                    }
                }
            }
        }
        assert generate(spec, V2) == ["###", "POST http://localhost/x", ""]

    def test_cross_dialect_ref_gives_no_body(self) -> None:
        spec = {
            "paths": {
                "/x": {
                    "post": {
                        "parameters": [
                            {
                                "name": "body",
                                "in": "body",
                                "schema": {"$ref": "#/components/schemas/Pet"},
                            }
                        ]
                    }
                }
            },
            "definitions": {"Pet": {"type": "object", "properties": {"a": {"type": "string"}}}},
        }
        assert generate(spec, V2) == ["###", "POST http://localhost/x", ""]

    def test_custom_indent_and_unicode(self) -> None:
        spec = {
            "paths": {
                "/x": {
                    "post": {
                        "requestBody": {
                            "content": {"application/json": {"example": {"city": "Zürich"}}}
                        }
                    }
                }
            }
        }
        lines = HttpGenerator(indent=4).generate(spec, V3, SchemaSampler(Dialect.OPENAPI_3))
        assert lines[4] == '{\n    "city": "Zürich"\n}'


# ---------------------------------------------------------------------------
# Fixture documents
# ---------------------------------------------------------------------------


class TestFixtureOutput:
    """Full output for the bundled fixture documents."""

    def test_petstore_30(self, petstore_30_raw: dict[str, Any]) -> None:
        blocks = _blocks(generate(petstore_30_raw, V3))
        base = "https://petstore.example.com/v1"

        assert blocks[0] == [
            "###",
            "# List all pets",
            f"GET {base}/pets",
            "X-Request-Id: ",
            "# Query: limit (integer) - How many items to return",
        ]

        post = blocks[1]
        assert post[:6] == [
            "###",
            "# Create a pet",
            "# Adds a pet to the store",
            f"POST {base}/pets",
            "Content-Type: application/json",
            "",
        ]
        assert json.loads(post[6]) == {
            "name": "",
            "tag": "cat",
            "owner": {"id": 0, "pets": [{"name": "", "tag": "cat", "owner": {}}]},
        }
        assert post[7:] == [""]

        assert blocks[2] == [
            "###",
            "# Info for a specific pet",
            f"GET {base}/pets/{{petId}}",
            "X-Tenant: ",
        ]

        put = blocks[3]
        assert put[:5] == [
            "###",
            f"PUT {base}/pets/{{petId}}",
            "X-Tenant: ",
            "Content-Type: application/vnd.pet+json",
            "",
        ]
        assert json.loads(put[5]) == {"name": "Fido", "tag": "dog"}
        assert put[6:] == [""]

        assert blocks[4] == [
            "###",
            "# Delete a pet",
            f"DELETE {base}/pets/{{petId}}",
            "X-Tenant: ",
        ]
        assert len(blocks) == 5

    def test_swagger_20(self, swagger_20_raw: dict[str, Any]) -> None:
        blocks = _blocks(generate(swagger_20_raw, V2))
        base = "https://api.example.com/v1"

        assert blocks[0] == [
            "###",
            "# List users",
            f"GET {base}/users",
            "# Query: page (integer) - Page number",
            "# Query: q (unknown) - ",
        ]

        post = blocks[1]
        assert post[:6] == [
            "###",
            "# Create user",
            f"POST {base}/users",
            "Authorization: ",
            "Content-Type: application/json",
            "",
        ]
        assert json.loads(post[6]) == {
            "id": 0,
            "email": "",
            "status": "active",
            "manager": {"id": 0, "email": "", "status": "active", "manager": {}},
        }

        patch_block = blocks[2]
        assert patch_block[1] == f"PATCH {base}/users/{{id}}"
        assert json.loads(patch_block[4]) == {"active": False, "roles": ["admin"]}
        assert patch_block[-1] == ""

        assert blocks[3] == ["###", "# Remove a user", f"DELETE {base}/users/{{id}}"]
