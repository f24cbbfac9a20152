"""Build Swagger parameter factories for schemas held by a registry."""

from collections.abc import Callable, Mapping

import structlog

from .config import resolve_oas
from .exceptions import SchemaNotFoundError
from .models import NormalizedSchema, ParameterOptions
from .normalizer import convert
from .projector import project
from .registry import SchemaSource
from .resolver import resolve_refs

logger = structlog.get_logger(__name__)

ParameterFactory = Callable[[Mapping | ParameterOptions], list[dict]]


def build_parameter_factory(
    identifier: str,
    registry: SchemaSource,
    oas: int | None = None,
) -> ParameterFactory:
    """Normalize and dereference schema ``identifier`` once.

    Returns a function that takes ``{"in": "body" | "formData" | "query" | "path"}``
    and returns the Swagger parameter list for that placement.
    Raises SchemaNotFoundError if the registry does not know ``identifier``
    and ValueError for an ``oas`` other than 2 or 3.
    """
    oas = resolve_oas(oas)

    entry = registry.get_schema(identifier)
    if entry is None:
        raise SchemaNotFoundError(identifier)

    document = convert(entry.document, oas)
    document = resolve_refs(document, registry, oas=oas)
    normalized = NormalizedSchema(document=document, oas=oas)
    logger.debug(
        "Built parameter factory",
        identifier=identifier,
        oas=oas,
        is_complex=normalized.is_complex,
    )

    def to_swagger_json(options: Mapping | ParameterOptions) -> list[dict]:
        if not isinstance(options, ParameterOptions):
            options = ParameterOptions.model_validate(options)
        return project(normalized, options.location)

    return to_swagger_json


to_swagger = build_parameter_factory
