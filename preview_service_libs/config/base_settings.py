"""Base settings class shared by the preview services."""

from __future__ import annotations

from preview_common.config_enums import Environment
from pydantic import Field
from pydantic_settings import BaseSettings


class ServiceSettingsBase(BaseSettings):
    """Environment-aware base for service settings.

    Subclasses provide their own ``model_config`` (env prefix, env file).
    """

    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",
        description="Runtime environment for the service",
    )

    def is_development(self) -> bool:
        return self.ENVIRONMENT in (Environment.DEVELOPMENT, Environment.TESTING)
