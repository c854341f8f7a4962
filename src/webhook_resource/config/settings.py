"""Pydantic Settings for the Concourse build environment."""

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when input or environment configuration is unusable."""

    pass


@dataclass(frozen=True)
class BuildEnvironment:
    """Concourse build metadata the callback URL is derived from."""

    team_name: Optional[str] = None
    pipeline_name: Optional[str] = None
    external_url: Optional[str] = None
    instance_vars: dict[str, Any] = field(default_factory=dict)


class Settings(BaseSettings):
    """Settings read from env vars and an optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False, alias="DEBUG_MODE")
    timeout: int = Field(default=30, alias="GITHUB_TIMEOUT", description="HTTP timeout in seconds")

    # Build metadata injected by Concourse into every resource container
    build_team_name: Optional[str] = Field(default=None, alias="BUILD_TEAM_NAME")
    build_pipeline_name: Optional[str] = Field(default=None, alias="BUILD_PIPELINE_NAME")
    atc_external_url: Optional[str] = Field(default=None, alias="ATC_EXTERNAL_URL")
    build_pipeline_instance_vars: Optional[str] = Field(
        default=None, alias="BUILD_PIPELINE_INSTANCE_VARS"
    )

    def build_environment(self) -> BuildEnvironment:
        """Return the build metadata as an immutable value.

        Raises:
            ConfigurationError: If BUILD_PIPELINE_INSTANCE_VARS is not a JSON object.
        """
        return BuildEnvironment(
            team_name=self.build_team_name or None,
            pipeline_name=self.build_pipeline_name or None,
            external_url=self.atc_external_url or None,
            instance_vars=parse_instance_vars(self.build_pipeline_instance_vars),
        )


def parse_instance_vars(raw: Optional[str]) -> dict[str, Any]:
    """Parse the JSON object held in BUILD_PIPELINE_INSTANCE_VARS.

    Args:
        raw: The raw environment value, possibly empty.

    Returns:
        The decoded mapping, in document order.

    Raises:
        ConfigurationError: If the value is not valid JSON or not an object.
    """
    if not raw or not raw.strip():
        return {}

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"BUILD_PIPELINE_INSTANCE_VARS is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ConfigurationError("BUILD_PIPELINE_INSTANCE_VARS must be a JSON object")

    return parsed


# Global settings instance (lazy-loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None
