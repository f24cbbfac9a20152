"""Dereference `$ref` pointers in a normalized schema.

Two reference forms are supported:
- ``#/a/b/c``: a JSON pointer into the root of the document being resolved
- ``identifier``: another schema held by the registry

References that cannot be found are left in place and reported through
:func:`find_unresolved_refs`.
"""

import copy

import structlog

from .config import get_settings, resolve_oas
from .exceptions import CircularReferenceError, ReferenceDepthError
from .normalizer import convert
from .pointer import MISSING, lookup_pointer, pointer_segments
from .registry import SchemaSource

logger = structlog.get_logger(__name__)


class _ReferenceWalker:
    """Depth-first walk that replaces every `$ref` node with its target."""

    def __init__(self, root, registry: SchemaSource, oas: int, max_depth: int):
        self.root = root
        self.registry = registry
        self.oas = oas
        self.max_depth = max_depth

    def walk(self, value, chain: list[str]):
        if isinstance(value, dict):
            if isinstance(value.get("$ref"), str):
                return self._expand(value, chain)
            for key in list(value):
                value[key] = self.walk(value[key], chain)
        elif isinstance(value, list):
            for index, item in enumerate(value):
                value[index] = self.walk(item, chain)
        return value

    def _expand(self, node: dict, chain: list[str]):
        ref = node["$ref"]
        if ref in chain:
            raise CircularReferenceError(chain + [ref])

        target = self._lookup(ref)
        if target is MISSING:
            logger.warning("Unresolved schema reference", ref=ref)
            for key in list(node):
                if key != "$ref":
                    node[key] = self.walk(node[key], chain)
            return node

        if len(chain) >= self.max_depth:
            raise ReferenceDepthError(chain + [ref], self.max_depth)

        logger.debug("Resolved schema reference", ref=ref, depth=len(chain) + 1)
        # the target may hold references of its own, chained or nested
        return self.walk(target, chain + [ref])

    def _lookup(self, ref: str):
        if ref.startswith("#"):
            found = lookup_pointer(self.root, pointer_segments(ref))
            if found is MISSING:
                return MISSING
            return copy.deepcopy(found)

        entry = self.registry.get_schema_by_reference(ref)
        if entry is None:
            return MISSING
        return convert(entry.document, self.oas)


def resolve_refs(
    schema: dict,
    registry: SchemaSource,
    oas: int | None = None,
    max_depth: int | None = None,
):
    """Replace `$ref` nodes in ``schema`` with the schemas they point to.

    ``schema`` is modified in place and returned. Schemas pulled from the
    registry are normalized for ``oas`` before they are inserted. Raises
    CircularReferenceError when a reference is reached again while it is
    still being expanded, and ReferenceDepthError when nesting exceeds
    ``max_depth``.
    """
    oas = resolve_oas(oas)
    if max_depth is None:
        max_depth = get_settings().max_reference_depth

    walker = _ReferenceWalker(schema, registry, oas, max_depth)
    return walker.walk(schema, [])


def find_unresolved_refs(schema) -> list[str]:
    """Return every `$ref` string still present in ``schema``, in walk order."""
    refs = []
    if isinstance(schema, dict):
        if isinstance(schema.get("$ref"), str):
            refs.append(schema["$ref"])
        for value in schema.values():
            refs.extend(find_unresolved_refs(value))
    elif isinstance(schema, list):
        for item in schema:
            refs.extend(find_unresolved_refs(item))
    return refs
