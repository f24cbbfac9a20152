"""Project a resolved schema into Swagger parameter descriptors.

Simple object schemas expand to one parameter per property. Anything else
is wrapped as a single JSON payload; complex structures can only travel in
the request body.
"""

import copy

import structlog

from .exceptions import UnsupportedPlacementError
from .models import NormalizedSchema, Placement

logger = structlog.get_logger(__name__)

BODY_PARAMETER_NAME = "JSON payload"


def wrap_schema(schema: dict, placement: Placement) -> dict:
    """Wrap the whole schema in one parameter descriptor."""
    out = {
        "description": schema.get("description") or "",
        "in": placement.value,
    }

    if placement is Placement.BODY:
        required = schema.get("required")
        out["name"] = BODY_PARAMETER_NAME
        out["schema"] = copy.deepcopy(schema)
        out["required"] = len(required) > 0 if isinstance(required, list) else False

    return out


def _expand_properties(schema: dict, placement: Placement) -> list[dict]:
    required_props = schema.get("required") or []
    params = []
    for name, prop_schema in (schema.get("properties") or {}).items():
        param = {
            "name": name,
            "in": placement.value,
            "required": name in required_props,
        }
        if isinstance(prop_schema, dict):
            param.update(copy.deepcopy(prop_schema))
        params.append(param)
    return params


def project(normalized: NormalizedSchema, placement: Placement | str) -> list[dict]:
    """Build the parameter list for ``placement``.

    Raises UnsupportedPlacementError when a schema with nested objects is
    requested as query or path parameters. Form data falls back to body.
    """
    placement = Placement(placement)
    schema = normalized.document
    is_complex = normalized.is_complex

    if (
        placement is not Placement.BODY
        and schema.get("type") == "object"
        and not is_complex
    ):
        return _expand_properties(schema, placement)

    if placement is Placement.FORM_DATA and is_complex:
        # form fields cannot carry nested structures
        logger.debug("Complex schema moved from formData to body")
        placement = Placement.BODY
    elif placement is not Placement.BODY and is_complex:
        raise UnsupportedPlacementError(placement.value)

    return [wrap_schema(schema, placement)]
