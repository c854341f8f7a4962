"""Webhook reconciliation: URL composition, hook matching and the put flow."""

from webhook_resource.resource.models import (
    DesiredHook,
    DesiredHookConfig,
    Params,
    PutRequest,
    ReconciliationResult,
    Source,
    VersionRequest,
    parse_put_request,
    parse_version_request,
)
from webhook_resource.resource.url import compose_callback_url
from webhook_resource.resource.matcher import find_match
from webhook_resource.resource.reconcile import (
    Action,
    AlreadyAbsent,
    Create,
    Delete,
    NoOp,
    Update,
    apply_action,
    reconcile,
)
from webhook_resource.resource.runner import OutResult, run_out

__all__ = [
    "DesiredHook",
    "DesiredHookConfig",
    "Params",
    "PutRequest",
    "ReconciliationResult",
    "Source",
    "VersionRequest",
    "parse_put_request",
    "parse_version_request",
    "compose_callback_url",
    "find_match",
    "Action",
    "AlreadyAbsent",
    "Create",
    "Delete",
    "NoOp",
    "Update",
    "apply_action",
    "reconcile",
    "OutResult",
    "run_out",
]
