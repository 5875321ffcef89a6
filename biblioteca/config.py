"""
Configuration for the catalog gateway.

Values come from environment variables prefixed with ``BIBLIOTECA_``
(or a local ``.env`` file). The JWT secret must match whatever the
identity provider signs tokens with; the default is only suitable for
local development and tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the catalog gateway."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BIBLIOTECA_",
        case_sensitive=False,
        extra="ignore",
    )

    SERVICE_NAME: str = "biblioteca-catalogo"

    HTTP_HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    HTTP_PORT: int = Field(default=8080, description="HTTP server port")

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    JWT_SECRET_KEY: SecretStr = Field(
        default=SecretStr("dev-only-secret-change-me-in-production"),
        description="Shared secret used to verify bearer tokens",
    )
    JWT_ALGORITHM: str = Field(default="HS256", description="JWT signing algorithm")
    # Dotted names walk nested claims, e.g. Keycloak's realm_access.roles
    JWT_ROLE_CLAIM_NAMES: List[str] = Field(
        default_factory=lambda: ["roles", "realm_access.roles"],
        description=(
            "Ordered list of JWT claim names to check for caller roles. "
            "The first claim present in the token is used."
        ),
    )

    CATALOG_SEED_FILE: Optional[Path] = Field(
        default=None,
        description="JSON file used to seed the in-process catalog; "
        "defaults to the bundled sample data",
    )


settings = Settings()
