"""Data models shared by the normalizer, resolver and projector.

Schema trees themselves stay plain dicts; these models describe the
values that travel between the layers.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

NESTED_KEYWORDS = ("properties", "patternProperties")
CHILD_KEYWORDS = ("items", "additionalProperties", "additionalItems")


class Placement(str, Enum):
    """Where an HTTP request carries a parameter."""

    BODY = "body"
    FORM_DATA = "formData"
    QUERY = "query"
    PATH = "path"


class ParameterOptions(BaseModel):
    """Options accepted by a parameter factory."""

    model_config = ConfigDict(populate_by_name=True)

    location: Placement = Field(alias="in")


class RegisteredSchema(BaseModel):
    """A schema document as returned by a registry lookup."""

    identifier: str
    document: dict | bool


def iter_children(schema: dict):
    """Yield every sub-schema mapping directly below ``schema``."""
    for keyword in NESTED_KEYWORDS:
        value = schema.get(keyword)
        if isinstance(value, dict):
            for child in value.values():
                if isinstance(child, dict):
                    yield child
    for keyword in CHILD_KEYWORDS:
        child = schema.get(keyword)
        if isinstance(child, dict):
            yield child


def has_complex_structures(schema: dict) -> bool:
    """True when an object-typed node sits anywhere below the root."""
    for child in iter_children(schema):
        if child.get("type") == "object" or has_complex_structures(child):
            return True
    return False


class NormalizedSchema(BaseModel):
    """A normalized, reference-resolved schema ready for projection."""

    document: dict
    oas: int = 2

    @property
    def is_complex(self) -> bool:
        return has_complex_structures(self.document)
