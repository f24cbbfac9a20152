"""Settings for schema2swagger, read from SCHEMA2SWAGGER_* environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Conversion defaults. Explicit function arguments always take precedence."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA2SWAGGER_",
        extra="ignore",
    )

    default_oas: int = Field(default=2, ge=2, le=3, description="OpenAPI version targeted when none is given.")
    max_reference_depth: int = Field(default=64, ge=1, description="Longest chain of nested $ref expansions allowed.")
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="console", description="Log format ('console' or 'json')")


def get_settings() -> Settings:
    return Settings()


SUPPORTED_OAS = (2, 3)


def resolve_oas(oas: int | None) -> int:
    """Return ``oas``, or the configured default when it is None."""
    if oas is None:
        return get_settings().default_oas
    if oas not in SUPPORTED_OAS:
        raise ValueError(f"Unsupported OpenAPI version: {oas!r} (expected 2 or 3)")
    return oas
