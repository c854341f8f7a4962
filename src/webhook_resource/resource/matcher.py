"""Find the registered hook that delivers to the desired callback."""

from typing import Iterable, Optional

from webhook_resource.github.models import ExistingHook, HookConfig
from webhook_resource.resource.models import DesiredHookConfig


def config_matches(hook_config: HookConfig, desired: DesiredHookConfig) -> bool:
    """Return True if every desired field is present and equal on the hook's config.

    Only ``url`` and the content type are compared; whatever else GitHub
    reports on the hook is ignored. The content type may sit under either
    ``content_type`` or ``content-type``, and either one holding the desired
    value is enough.
    """
    if hook_config.url != desired.url:
        return False
    return desired.content_type in (hook_config.content_type, hook_config.content_type_sent)


def find_match(
    existing_hooks: Iterable[ExistingHook],
    desired: DesiredHookConfig,
) -> Optional[ExistingHook]:
    """Return the first hook whose config contains the desired config, if any."""
    for hook in existing_hooks:
        if config_matches(hook.config, desired):
            return hook
    return None
