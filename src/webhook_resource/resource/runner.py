"""Programmatic entry point for the ``out`` script."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from webhook_resource.config.settings import BuildEnvironment, ConfigurationError
from webhook_resource.github.client import GitHubHooksClient, RemoteCallError, hooks_endpoint
from webhook_resource.resource.models import DesiredHook, DesiredHookConfig, PutRequest
from webhook_resource.resource.reconcile import apply_action, describe, reconcile
from webhook_resource.resource.url import compose_callback_url


@dataclass
class OutResult:
    """Result of a put against the repository's hooks."""

    success: bool
    version_id: str = ""
    action: str = ""
    summary: str = ""
    error_message: str = ""
    log_lines: list[str] = field(default_factory=list)


def desired_hook_for(request: PutRequest, build_env: BuildEnvironment) -> DesiredHook:
    """Derive the desired hook from a validated put request.

    Raises:
        ConfigurationError: If the callback URL cannot be composed.
    """
    url = compose_callback_url(request.source, request.params, build_env)
    return DesiredHook(
        config=DesiredHookConfig(url=url),
        events=tuple(request.params.events),
    )


def run_out(
    request: PutRequest,
    build_env: BuildEnvironment,
    client: Optional[GitHubHooksClient] = None,
    timeout: int = 30,
    logger: Optional[logging.Logger] = None,
) -> OutResult:
    """Reconcile the repository's hooks with the put request.

    Args:
        request: Validated put request.
        build_env: Concourse build metadata.
        client: Hooks client; one is built from the source token when omitted.
        timeout: HTTP timeout in seconds for a client built here.
        logger: Optional logger for debug output.

    Returns:
        OutResult with the resulting hook id, or the error that stopped the run.
    """
    logger = logger or logging.getLogger(__name__)
    source = request.source
    params = request.params

    endpoint = hooks_endpoint(source.github_api, params.org, params.repo)

    try:
        desired = desired_hook_for(request, build_env)
    except ConfigurationError as e:
        return OutResult(success=False, error_message=str(e))

    log_lines = [
        f"Webhook location: {endpoint}",
        f"Target Concourse resource: {desired.config.url}",
    ]
    for line in log_lines:
        logger.debug(line)

    if client is None:
        client = GitHubHooksClient(source.github_token, timeout=timeout, logger=logger)

    try:
        existing_hooks = client.list_hooks(endpoint)
        logger.debug(f"Found {len(existing_hooks)} existing hooks")

        action = reconcile(params.operation, desired, existing_hooks)
        summary = describe(action)
        logger.debug(f"Action: {type(action).__name__}")

        result = apply_action(action, client, endpoint, logger=logger)
    except RemoteCallError as e:
        return OutResult(success=False, error_message=str(e), log_lines=log_lines)

    log_lines.extend(result.details)

    return OutResult(
        success=True,
        version_id=result.id,
        action=type(action).__name__,
        summary=summary,
        log_lines=log_lines,
    )
