"""Schema registry contract and a simple in-memory implementation.

Any object with ``get_schema`` and ``get_schema_by_reference`` can act as
the registry (e.g. an adapter around a validator instance). ``SchemaRegistry``
covers the common case of schemas kept in memory or loaded from files.
"""

from pathlib import Path
from typing import Protocol

import structlog
import yaml

from .models import RegisteredSchema
from .pointer import MISSING, lookup_pointer, pointer_segments

logger = structlog.get_logger(__name__)

SCHEMA_SUFFIXES = (".yaml", ".yml", ".json")


class SchemaSource(Protocol):
    """Lookup interface the converter needs from a schema registry."""

    def get_schema(self, identifier: str) -> RegisteredSchema | None:
        ...

    def get_schema_by_reference(self, ref: str) -> RegisteredSchema | None:
        ...


class SchemaRegistry:
    """Holds schema documents keyed by identifier."""

    def __init__(self, schemas: dict[str, dict] | None = None):
        self._schemas: dict[str, dict | bool] = {}
        for identifier, document in (schemas or {}).items():
            self.add_schema(document, identifier)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def add_schema(self, document: dict | bool, identifier: str | None = None) -> str:
        """Register ``document`` and return the identifier it was stored under.

        Without an explicit identifier the document's ``$id`` (or ``id``) is used.
        """
        if identifier is None and isinstance(document, dict):
            identifier = document.get("$id") or document.get("id")
        if not identifier:
            raise ValueError("Schema has no identifier: pass one or set `$id`")
        self._schemas[identifier] = document
        logger.debug("Registered schema", identifier=identifier)
        return identifier

    def get_schema(self, identifier: str) -> RegisteredSchema | None:
        if identifier not in self._schemas:
            return None
        return RegisteredSchema(identifier=identifier, document=self._schemas[identifier])

    def get_schema_by_reference(self, ref: str) -> RegisteredSchema | None:
        """Look up ``identifier`` or ``identifier#/json/pointer``."""
        identifier, _, fragment = ref.partition("#")
        entry = self.get_schema(identifier)
        if entry is None or not fragment.strip("/"):
            return entry

        found = lookup_pointer(entry.document, pointer_segments(fragment))
        if found is MISSING or not isinstance(found, (dict, bool)):
            return None
        return RegisteredSchema(identifier=ref, document=found)

    def load_file(self, file_path: Path) -> str:
        """Load one YAML or JSON schema file; returns the identifier used."""
        text = file_path.read_text(encoding="utf-8")
        document = yaml.safe_load(text)
        if not isinstance(document, dict):
            raise ValueError(f"{file_path} does not contain a schema object")
        identifier = document.get("$id") or document.get("id") or file_path.stem
        return self.add_schema(document, identifier)

    def load_directory(self, directory: Path) -> list[str]:
        """Load every schema file in ``directory`` (sorted by name)."""
        identifiers = []
        for path in sorted(directory.iterdir()):
            if path.is_file() and path.suffix.lower() in SCHEMA_SUFFIXES:
                identifiers.append(self.load_file(path))
        return identifiers
