"""Runtime configuration for the webhook resource."""

from webhook_resource.config.settings import (
    BuildEnvironment,
    ConfigurationError,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "BuildEnvironment",
    "ConfigurationError",
    "Settings",
    "get_settings",
    "reset_settings",
]
