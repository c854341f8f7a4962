"""Decide and apply the single change that brings a repository's hooks in line.

The engine is split in two steps. ``reconcile`` is a pure decision over the
listed hooks and returns one of the action types below. ``apply_action``
carries that action out against a hook repository, issuing at most one write.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from webhook_resource.github.client import GitHubHooksClient
from webhook_resource.github.models import ExistingHook
from webhook_resource.resource.matcher import find_match
from webhook_resource.resource.models import DesiredHook, ReconciliationResult


@dataclass(frozen=True)
class Create:
    desired: DesiredHook


@dataclass(frozen=True)
class Update:
    existing_id: Union[int, str]
    desired: DesiredHook
    existing: Optional[ExistingHook] = None


@dataclass(frozen=True)
class NoOp:
    existing: ExistingHook


@dataclass(frozen=True)
class Delete:
    existing: ExistingHook


@dataclass(frozen=True)
class AlreadyAbsent:
    synthetic_id: str


Action = Union[Create, Update, NoOp, Delete, AlreadyAbsent]


def events_differ(existing: Iterable[str], desired: Iterable[str]) -> bool:
    """Compare event lists as sets."""
    return set(existing) != set(desired)


def synthetic_id(now: Optional[float] = None) -> str:
    """Timestamp id, in epoch milliseconds, reported for a hook that is already gone."""
    if now is None:
        now = time.time()
    return str(int(now * 1000))


def reconcile(
    operation: str,
    desired: DesiredHook,
    existing_hooks: Iterable[ExistingHook],
    now: Optional[float] = None,
) -> Action:
    """Pick the action for ``operation`` given the hooks already registered.

    Args:
        operation: ``"create"`` or ``"delete"``.
        desired: The hook the put step asks for.
        existing_hooks: Hooks currently registered on the repository.
        now: Optional epoch seconds used for the synthetic id of an absent hook.

    Returns:
        The action to apply.

    Raises:
        ValueError: If the operation is unknown.
    """
    match = find_match(existing_hooks, desired.config)

    if operation == "create":
        if match is None:
            return Create(desired)
        if events_differ(match.events, desired.events):
            return Update(match.id, desired, existing=match)
        return NoOp(match)

    if operation == "delete":
        if match is None:
            return AlreadyAbsent(synthetic_id(now))
        return Delete(match)

    raise ValueError(f"Unknown operation: {operation}")


def describe(action: Action) -> str:
    """Human-readable summary of an action, for the build log."""
    if isinstance(action, Create):
        return "Webhook created"
    if isinstance(action, Update):
        return f"Webhook {action.existing_id} updated"
    if isinstance(action, NoOp):
        return "Webhook already exists"
    if isinstance(action, Delete):
        return f"Webhook {action.existing.id} deleted"
    return "Webhook does not exist"


def apply_action(
    action: Action,
    repository: GitHubHooksClient,
    endpoint: str,
    logger: Optional[logging.Logger] = None,
) -> ReconciliationResult:
    """Carry out ``action`` and return the identity of the resulting hook.

    Create, Update and Delete issue exactly one request; NoOp and AlreadyAbsent
    issue none. The result's ``details`` hold the lines for the build log.
    """
    logger = logger or logging.getLogger(__name__)

    if isinstance(action, Create):
        created = repository.create_hook(endpoint, action.desired.to_request_body())
        details = (f"Successfully created webhook: {created.model_dump_json()}",)
        hook_id = created.id

    elif isinstance(action, Update):
        updated = repository.update_hook(
            f"{endpoint}/{action.existing_id}",
            action.desired.to_request_body(),
        )
        previous = action.existing.model_dump_json() if action.existing else action.existing_id
        details = (
            f"Successfully updated webhook configuration from:\n{previous}\n\n"
            f"to:\n{updated.model_dump_json()}",
        )
        hook_id = updated.id

    elif isinstance(action, Delete):
        repository.delete_hook(f"{endpoint}/{action.existing.id}")
        details = ("Webhook deleted successfully",)
        hook_id = action.existing.id

    elif isinstance(action, NoOp):
        details = (f"Webhook already exists with events {json.dumps(action.existing.events)}",)
        hook_id = action.existing.id

    else:
        details = ("Webhook does not exist",)
        hook_id = action.synthetic_id

    for line in details:
        logger.debug(line)
    return ReconciliationResult(id=str(hook_id), details=details)
