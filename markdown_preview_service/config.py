"""Configuration for the Markdown Preview Editor Service.

Uses Pydantic settings for environment-based configuration. The upstream
render URL is required; every other option has a working default.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
from uuid import uuid4

from preview_service_libs.config import ServiceSettingsBase
from preview_service_libs.error_handling import raise_configuration_error
from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import SettingsConfigDict

SERVICE_ROOT = Path(__file__).parent


class EditorSettings(ServiceSettingsBase):
    """Configuration settings for the editor service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="EDITOR_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Service identity
    SERVICE_NAME: str = "markdown-preview-editor"

    # HTTP server configuration
    HOST: str = Field(default="0.0.0.0", description="HTTP server host")
    PORT: int = Field(
        default=8080,
        validation_alias=AliasChoices("PORT", "EDITOR_PORT"),
        description="HTTP server port (PORT is set by the hosting platform)",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # Upstream render service
    UPSTREAM_RENDER_URL: str = Field(
        description="URL of the upstream markdown render endpoint",
    )
    UPSTREAM_UNAUTHENTICATED: bool = Field(
        default=False,
        description="Any non-empty value disables identity tokens on upstream calls",
    )
    METADATA_SERVER_URL: str = Field(
        default="http://metadata.google.internal",
        description="Base URL of the metadata server issuing identity tokens",
    )

    # Static assets
    TEMPLATE_DIR: Path = Field(
        default=SERVICE_ROOT / "templates",
        description="Directory holding the editor page template and default markdown",
    )
    TEMPLATE_NAME: str = Field(default="index.html", description="Editor page template")
    DEFAULT_MARKDOWN_NAME: str = Field(
        default="markdown.md", description="Markdown pre-filled into the editor"
    )

    # HTTP client configuration
    UPSTREAM_TIMEOUT_SECONDS: float = Field(
        default=10.0, description="Upstream render request timeout in seconds"
    )
    UPSTREAM_CONNECT_TIMEOUT_SECONDS: float = Field(
        default=3.0, description="Upstream render connection timeout in seconds"
    )
    METADATA_TIMEOUT_SECONDS: float = Field(
        default=2.0, description="Identity token request timeout in seconds"
    )
    DISCONNECT_POLL_INTERVAL_SECONDS: float = Field(
        default=0.25,
        gt=0,
        description="How often an in-flight render checks for a disconnected browser",
    )

    @field_validator("UPSTREAM_RENDER_URL")
    @classmethod
    def _require_upstream_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("upstream render URL must not be empty")
        return value

    @field_validator("UPSTREAM_UNAUTHENTICATED", mode="before")
    @classmethod
    def _presence_means_unauthenticated(cls, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        return str(value) != ""

    @property
    def upstream_authenticated(self) -> bool:
        return not self.UPSTREAM_UNAUTHENTICATED

    @property
    def template_path(self) -> Path:
        return self.TEMPLATE_DIR / self.TEMPLATE_NAME

    @property
    def default_markdown_path(self) -> Path:
        return self.TEMPLATE_DIR / self.DEFAULT_MARKDOWN_NAME


def load_settings(**overrides: Any) -> EditorSettings:
    """Build settings from the environment.

    Raises:
        PreviewServiceError: CONFIGURATION_ERROR when the upstream URL is
            missing or empty
    """
    try:
        return EditorSettings(**overrides)
    except ValidationError as e:
        if any(error["loc"][:1] == ("UPSTREAM_RENDER_URL",) for error in e.errors()):
            raise_configuration_error(
                service="markdown_preview_service",
                operation="load_settings",
                config_key="EDITOR_UPSTREAM_RENDER_URL",
                message=(
                    "no configuration for upstream render service: "
                    "add EDITOR_UPSTREAM_RENDER_URL environment variable"
                ),
                correlation_id=uuid4(),
            )
        raise


@lru_cache
def get_settings() -> EditorSettings:
    """Get cached settings instance."""
    return load_settings()
