"""Synthesise representative sample values from schema fragments.

The sampler walks a :data:`~openapi2http.models.SchemaFragment` and produces a
JSON-compatible value showing the *shape* of data the schema accepts. At each
step the first matching rule wins:

1. absent fragment -> ``{}``
2. ``$ref`` -> ``{}`` if the pointer was already followed in this call,
   otherwise the sample of its target
3. ``example`` -> returned verbatim
4. ``default`` -> returned verbatim
5. object with properties -> one key per property, in declaration order
6. array with items -> a one-element list
7. non-empty ``enum`` -> its first value
8. ``string`` -> ``""``; ``integer``/``number`` -> ``0``; ``boolean`` -> ``False``
9. anything else -> ``{}``

Bad or cyclic references never raise: the goal is an illustrative body, not
validation, so they degrade to ``{}``.

The ``visited`` set is explicit state. A top-level call starts with a fresh
set and the same set is threaded through that call's entire recursion tree,
so a schema reached once is not expanded a second time anywhere in the same
sample.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from openapi2http.models import (
    ArraySchema,
    Dialect,
    ObjectSchema,
    PrimitiveSchema,
    RefSchema,
    SchemaFragment,
    UnknownSchema,
    parse_schema,
)
from openapi2http.output import debug

_FRAGMENT_TYPES = (RefSchema, ObjectSchema, ArraySchema, PrimitiveSchema, UnknownSchema)

_PRIMITIVE_SAMPLES: dict[str, Any] = {
    "string": "",
    "integer": 0,
    "number": 0,
    "boolean": False,
}


def sample(
    fragment: Any,
    schemas: Mapping[str, Any],
    visited: Optional[set[str]] = None,
    dialect: Dialect = Dialect.OPENAPI_3,
) -> Any:
    """Return a sample value for *fragment*.

    Args:
        fragment: A parsed fragment, a raw schema mapping, or ``None``.
        schemas: The document's schema registry (``definitions`` or
            ``components.schemas``).
        visited: ``$ref`` strings already followed in this call chain.
            ``None`` starts a fresh set; pass a set to share it.
        dialect: The active dialect, which decides the registry ``$ref``
            pointers may resolve into.

    Returns:
        A JSON-compatible sample value.

    Example::

        sample({"type": "object", "properties": {"id": {"type": "integer"}}}, {})
        # {"id": 0}
    """
    if visited is None:
        visited = set()
    if not isinstance(fragment, _FRAGMENT_TYPES):
        fragment = parse_schema(fragment)

    if fragment is None:
        return {}

    if isinstance(fragment, RefSchema):
        if fragment.ref in visited:
            debug(f"Cyclic $ref {fragment.ref} sampled as {{}}")
            return {}
        visited.add(fragment.ref)
        return sample(resolve_ref(schemas, fragment.ref, dialect), schemas, visited, dialect)

    if fragment.has_example:
        return fragment.example
    if fragment.has_default:
        return fragment.default

    if isinstance(fragment, ObjectSchema):
        return {
            name: sample(prop, schemas, visited, dialect)
            for name, prop in fragment.properties.items()
        }
    if isinstance(fragment, ArraySchema):
        return [sample(fragment.items, schemas, visited, dialect)]

    if fragment.enum:
        return fragment.enum[0]

    if isinstance(fragment, PrimitiveSchema):
        return _PRIMITIVE_SAMPLES[fragment.type]

    return {}


def resolve_ref(
    schemas: Mapping[str, Any], ref: str, dialect: Dialect
) -> Optional[SchemaFragment]:
    """Resolve a schema-registry ``$ref`` against *schemas*.

    A ``$ref`` names the registry it points into (``#/definitions/`` or
    ``#/components/schemas/``). It resolves only when that registry belongs
    to *dialect*, since *schemas* is that dialect's registry. JSON Pointer
    escapes (``~1`` for ``/``, ``~0`` for ``~``) in the name are decoded.

    Args:
        schemas: The schema registry of the document.
        ref: The ``$ref`` string.
        dialect: The active dialect.

    Returns:
        The parsed target fragment, or ``None`` when the reference points
        elsewhere, names a missing schema, or targets a non-mapping value.
    """
    if Dialect.for_ref(ref) is not dialect:
        debug(f"Unresolvable $ref {ref} for {dialect.label}")
        return None

    name = ref[len(dialect.ref_prefix):].replace("~1", "/").replace("~0", "~")
    if name not in schemas:
        debug(f"$ref {ref} names no schema")
        return None
    return parse_schema(schemas[name])


class SchemaSampler:
    """The sampler bound to one dialect, as used by the generator.

    Args:
        dialect: The dialect of the document being converted.
    """

    def __init__(self, dialect: Dialect = Dialect.OPENAPI_3) -> None:
        self.dialect = dialect

    def sample(
        self,
        fragment: Any,
        schemas: Mapping[str, Any],
        visited: Optional[set[str]] = None,
    ) -> Any:
        """Sample *fragment*; see :func:`sample`."""
        return sample(fragment, schemas, visited, self.dialect)

    def resolve_ref(self, schemas: Mapping[str, Any], ref: str) -> Optional[SchemaFragment]:
        """Resolve *ref* under this sampler's dialect; see :func:`resolve_ref`."""
        return resolve_ref(schemas, ref, self.dialect)
