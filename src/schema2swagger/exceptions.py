"""Exceptions raised while turning schemas into Swagger parameters."""


class SchemaSwaggerError(Exception):
    """Base class for all schema2swagger errors."""
    pass


class SchemaNotFoundError(SchemaSwaggerError):
    """Raised when a schema identifier is not present in the registry."""

    def __init__(self, identifier: str):
        super().__init__(f"Schema: {identifier} not found")
        self.identifier = identifier


class UnsupportedPlacementError(SchemaSwaggerError):
    """Raised when a complex schema is projected into a simple-value placement."""

    def __init__(self, placement: str):
        super().__init__(
            f"Swagger {placement} parameter schema can NOT be constructed "
            "with complex data structures. Not supported."
        )
        self.placement = placement


class SchemaReferenceError(SchemaSwaggerError):
    """Base class for `$ref` resolution failures."""

    def __init__(self, message: str, chain: list[str]):
        super().__init__(message)
        self.chain = chain


class CircularReferenceError(SchemaReferenceError):
    """Raised when a reference chain leads back to a reference being expanded."""

    def __init__(self, chain: list[str]):
        super().__init__(f"Circular schema reference: {' -> '.join(chain)}", chain)


class ReferenceDepthError(SchemaReferenceError):
    """Raised when nested references go deeper than the configured limit."""

    def __init__(self, chain: list[str], max_depth: int):
        super().__init__(
            f"Schema reference chain exceeds maximum depth of {max_depth}: {' -> '.join(chain)}",
            chain,
        )
        self.max_depth = max_depth
