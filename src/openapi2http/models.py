"""Canonical Pydantic models shared across all openapi2http modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Document models** -- a parsed-but-partial view of the input document,
built by :mod:`openapi2http.parser.extractor`. Absent fields are settled
once, at parse time, so the generator never has to default them:
    :class:`Dialect`, :class:`Parameter`, :class:`MediaContent`,
    :class:`RequestBody`, and :class:`Operation`.

**Schema fragments** -- a closed tagged union over JSON-Schema-like nodes,
discriminated by ``kind``:
    :class:`RefSchema`, :class:`ObjectSchema`, :class:`ArraySchema`,
    :class:`PrimitiveSchema`, and :class:`UnknownSchema`. Use
    :func:`parse_schema` to build one from a raw mapping.

**Configuration models** -- serialised as JSON in the user's config
directory:
    :class:`OutputConfig`, :class:`FilterConfig`, and :class:`GlobalConfig`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# --- Dialects ---


class Dialect(str, Enum):
    """The two API description dialects understood by the converter.

    The value is the leading character of the document's version string.
    """

    SWAGGER_2 = "2"
    OPENAPI_3 = "3"

    @property
    def ref_prefix(self) -> str:
        """The ``$ref`` prefix pointing into this dialect's schema registry."""
        return _REF_PREFIXES[self]

    @property
    def label(self) -> str:
        return "OpenAPI 3.x" if self is Dialect.OPENAPI_3 else "Swagger 2.0"

    @classmethod
    def for_ref(cls, ref: str) -> Optional[Dialect]:
        """Return the dialect whose schema registry *ref* points into, if any."""
        for dialect in cls:
            if ref.startswith(dialect.ref_prefix):
                return dialect
        return None


_REF_PREFIXES = {
    Dialect.SWAGGER_2: "#/definitions/",
    Dialect.OPENAPI_3: "#/components/schemas/",
}


# --- Schema fragments ---


PRIMITIVE_TYPES = ("string", "integer", "number", "boolean")


class _SchemaBase(BaseModel):
    """Fields shared by every non-reference schema node.

    ``example`` and ``default`` may legitimately hold falsy values
    (``0``, ``""``, ``False``, ``None``), so presence is read from
    ``model_fields_set`` rather than from the value.
    """

    model_config = ConfigDict(frozen=True)

    example: Any = None
    default: Any = None
    enum: Optional[list[Any]] = None

    @property
    def has_example(self) -> bool:
        return "example" in self.model_fields_set

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set


class RefSchema(BaseModel):
    """A node holding a ``$ref`` pointer. Sibling keywords are ignored."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["ref"] = "ref"
    ref: str


class ObjectSchema(_SchemaBase):
    """``type: object`` with a ``properties`` mapping (declaration order kept)."""

    kind: Literal["object"] = "object"
    properties: dict[str, Optional[SchemaFragment]] = Field(default_factory=dict)


class ArraySchema(_SchemaBase):
    """``type: array`` with an ``items`` entry."""

    kind: Literal["array"] = "array"
    items: Optional[SchemaFragment] = None


class PrimitiveSchema(_SchemaBase):
    """A scalar ``string``, ``integer``, ``number`` or ``boolean`` node."""

    kind: Literal["primitive"] = "primitive"
    type: Literal["string", "integer", "number", "boolean"]


class UnknownSchema(_SchemaBase):
    """Any node the other variants do not describe.

    Covers typeless nodes, objects without ``properties``, arrays without
    ``items`` and type names outside the JSON Schema core set.
    """

    kind: Literal["unknown"] = "unknown"
    type: Optional[str] = None


SchemaFragment = Union[RefSchema, ObjectSchema, ArraySchema, PrimitiveSchema, UnknownSchema]

ObjectSchema.model_rebuild()
ArraySchema.model_rebuild()


def parse_schema(raw: Any) -> Optional[SchemaFragment]:
    """Build a :data:`SchemaFragment` from a raw schema mapping.

    Args:
        raw: A schema object as decoded from JSON/YAML.

    Returns:
        The matching fragment variant, or ``None`` when *raw* is not a
        mapping (treated downstream as an absent fragment).
    """
    if not isinstance(raw, dict):
        return None

    ref = raw.get("$ref")
    if isinstance(ref, str) and ref:
        return RefSchema(ref=ref)

    common: dict[str, Any] = {key: raw[key] for key in ("example", "default") if key in raw}
    if isinstance(raw.get("enum"), list):
        common["enum"] = raw["enum"]

    schema_type = _normalise_type(raw.get("type"))

    if schema_type == "object" and isinstance(raw.get("properties"), dict):
        return ObjectSchema(
            properties={
                str(name): parse_schema(prop) for name, prop in raw["properties"].items()
            },
            **common,
        )
    if schema_type == "array" and raw.get("items") is not None:
        return ArraySchema(items=parse_schema(raw["items"]), **common)
    if schema_type in PRIMITIVE_TYPES:
        return PrimitiveSchema(type=schema_type, **common)
    return UnknownSchema(type=schema_type, **common)


def _normalise_type(type_value: Any) -> Optional[str]:
    """Reduce a ``type`` keyword to a single name.

    OpenAPI 3.1 allows type arrays such as ``["string", "null"]``; the first
    non-null entry wins.
    """
    if isinstance(type_value, list):
        non_null = [t for t in type_value if isinstance(t, str) and t != "null"]
        return non_null[0] if non_null else None
    if isinstance(type_value, str):
        return type_value
    return None


# --- Document models ---


class Parameter(BaseModel):
    """A single parameter of an operation.

    ``location`` is the raw ``in`` value; only ``header``, ``query`` and
    (Swagger 2.0) ``body`` influence the generated output.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    location: str = ""
    type: Optional[str] = None
    description: Optional[str] = None
    schema_: Optional[SchemaFragment] = Field(default=None, alias="schema")


class MediaContent(BaseModel):
    """One entry of an OpenAPI 3.x ``requestBody.content`` map."""

    model_config = ConfigDict(populate_by_name=True)

    schema_: Optional[SchemaFragment] = Field(default=None, alias="schema")
    example: Any = None
    examples: Optional[dict[str, Any]] = None


class RequestBody(BaseModel):
    """An OpenAPI 3.x request body; ``content`` keeps declaration order."""

    content: dict[str, MediaContent] = Field(default_factory=dict)


class Operation(BaseModel):
    """One route + HTTP method pair, ready for block generation.

    ``parameters`` already includes path-level parameters merged in, and is
    empty (never ``None``) when the document declares none.
    """

    path: str
    method: str
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: Optional[RequestBody] = None

    @property
    def is_mutating(self) -> bool:
        return self.method.lower() in ("post", "put", "patch")

    def parameters_in(self, location: str) -> list[Parameter]:
        return [p for p in self.parameters if p.location == location]


class ConversionResult(BaseModel):
    """The outcome of converting one document."""

    dialect: Dialect
    base_url: str
    operations: list[Operation] = Field(default_factory=list)
    lines: list[str] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """The ``.http`` file content: the lines joined with newlines."""
        return "\n".join(self.lines)


# --- Configuration models ---


DEFAULT_IGNORED_FILES = [
    "package.json",
    "tsconfig.json",
    "jsconfig.json",
    "settings.json",
    "launch.json",
    "tasks.json",
    "global.json",
    "appsettings.json",
    "config.json",
    "webpack.config.js",
    "webpack.config.json",
    "vite.config.js",
    "vite.config.json",
    "babel.config.js",
    "babel.config.json",
    "eslint.json",
    "eslint.yaml",
    "eslint.yml",
    "prettier.json",
    "prettier.yaml",
    "prettier.yml",
    "docker-compose.yml",
    "docker-compose.yaml",
]

DEFAULT_IGNORED_KEYWORDS = [
    "config",
    "setting",
    "package",
    "tsconfig",
    "jsconfig",
    "appsettings",
    "docker-compose",
]


class OutputConfig(BaseModel):
    """Output preferences stored in :class:`GlobalConfig`."""

    extension: str = Field(default=".http", description="Extension of the generated file")
    indent: int = Field(default=2, description="Indent width of JSON sample bodies")
    format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto", description="Rendering of inspect and config data on stdout"
    )


class FilterConfig(BaseModel):
    """Rules rejecting files that are not API descriptions.

    Matching is done on the lower-cased file name: an exact hit in
    ``ignored_files`` or a substring hit from ``ignored_keywords`` rejects
    the file, as does an extension outside ``extensions``.
    """

    ignored_files: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORED_FILES))
    ignored_keywords: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORED_KEYWORDS)
    )
    extensions: list[str] = Field(default_factory=lambda: [".json", ".yaml", ".yml"])


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/openapi2http/config.json``.

    Loaded and saved by :func:`~openapi2http.config.load_global_config` and
    :func:`~openapi2http.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by project config, environment
    variables, or CLI flags. See :func:`~openapi2http.config.resolve_config`
    for the full precedence chain.
    """

    output: OutputConfig = Field(default_factory=OutputConfig)
    filters: FilterConfig = Field(default_factory=FilterConfig)
