"""GitHub hooks API client and models."""

from webhook_resource.github.models import ExistingHook, HookConfig
from webhook_resource.github.client import GitHubHooksClient, RemoteCallError, hooks_endpoint

__all__ = [
    "ExistingHook",
    "HookConfig",
    "GitHubHooksClient",
    "RemoteCallError",
    "hooks_endpoint",
]
