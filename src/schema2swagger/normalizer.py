"""Normalize JSON-Schema dialect constructs into OpenAPI-compatible shape.

Handles:
- Nullable unions (type: ["string", "null"]) -> nullable flag (OAS 3) or dropped (OAS 2)
- Multi-type unions -> "string"
- $desc -> description
- oneOf/anyOf folding (OAS 2 only, conditions are not supported there)
- allOf used only for $toJSON data coercion (OAS 2 only)
"""

import copy

import structlog

from .config import resolve_oas
from .merge import deep_merge
from .models import CHILD_KEYWORDS, NESTED_KEYWORDS

logger = structlog.get_logger(__name__)

NULL_TYPE = "null"
FALLBACK_TYPE = "string"
COERCION_MARKER = "$toJSON"


def _coerce_type(schema: dict, oas: int) -> None:
    schema_type = schema["type"]
    if not isinstance(schema_type, list):
        return

    if schema_type and len(schema_type) <= 2 and NULL_TYPE in schema_type:
        if oas >= 3:
            schema["nullable"] = True
        remaining = list(schema_type)
        if len(remaining) == 2:
            remaining.remove(NULL_TYPE)
        schema["type"] = remaining[0]
    elif len(schema_type) >= 2:
        # OAS has no multi-type parameters; a string can carry any of them
        schema["type"] = FALLBACK_TYPE


def is_to_json_coercion(all_of) -> bool:
    """Check for the two-entry allOf that only wraps a schema for $toJSON coercion.

    The first entry holds nothing but the ``$toJSON`` marker, the second is
    the schema the data is validated against after coercion.
    """
    return (
        isinstance(all_of, list)
        and len(all_of) == 2
        and isinstance(all_of[0], dict)
        and isinstance(all_of[1], dict)
        and list(all_of[0]) == [COERCION_MARKER]
    )


def _fold_compositions(schema: dict) -> dict:
    for keyword in ("oneOf", "anyOf"):
        branches = schema.get(keyword)
        if isinstance(branches, list):
            merged = deep_merge({}, *[b for b in branches if isinstance(b, dict)])
            schema = deep_merge(schema, merged)
            del schema[keyword]

    if "allOf" in schema and is_to_json_coercion(schema["allOf"]):
        schema = deep_merge(schema, schema["allOf"][1])
        del schema["allOf"]

    return schema


def convert(schema: dict | None, oas: int | None = None) -> dict:
    """Return a normalized copy of ``schema`` for the given OpenAPI version.

    ``None`` is treated as an empty schema. The result shares no objects
    with the input, so it can be modified freely. Raises ValueError for an
    ``oas`` other than 2 or 3.
    """
    oas = resolve_oas(oas)
    logger.debug("Normalizing schema", oas=oas)
    return _convert(copy.deepcopy(schema), oas)


def _convert(schema, oas: int):
    if schema is None:
        return {}
    if not isinstance(schema, dict):
        return schema

    schema = dict(schema)

    # folded branches may carry their own type lists and $desc
    if oas == 2:
        schema = _fold_compositions(schema)

    if "type" in schema:
        _coerce_type(schema, oas)

    if isinstance(schema.get("$desc"), str):
        schema["description"] = schema.pop("$desc")

    for keyword in NESTED_KEYWORDS:
        if isinstance(schema.get(keyword), dict):
            schema[keyword] = {
                name: _convert(sub, oas) if isinstance(sub, dict) else sub
                for name, sub in schema[keyword].items()
            }

    for keyword in CHILD_KEYWORDS:
        if isinstance(schema.get(keyword), dict):
            schema[keyword] = _convert(schema[keyword], oas)

    return schema
