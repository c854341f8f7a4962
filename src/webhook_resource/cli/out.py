"""Put step: create or delete the repository webhook."""

import json
import sys
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from webhook_resource.config.settings import ConfigurationError, get_settings
from webhook_resource.resource.models import ReconciliationResult, parse_put_request
from webhook_resource.resource.runner import run_out

console = Console(stderr=True, soft_wrap=True)


def out_cmd(
    source_dir: Annotated[
        Optional[str],
        typer.Argument(help="Build directory passed by Concourse (unused)"),
    ] = None,
) -> None:
    """Reconcile the webhook described on stdin and print the resulting version."""
    from webhook_resource.cli.main import state

    raw = sys.stdin.read()
    if not raw.strip():
        console.print("STDIN ended with empty input. Exiting.")
        return

    try:
        request = parse_put_request(raw)
        build_env = get_settings().build_environment()
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    state.logger.info(
        f"Reconciling webhook for {request.params.org}/{request.params.repo} "
        f"(operation={request.params.operation}, events={request.params.events})"
    )

    result = run_out(request, build_env, timeout=state.timeout, logger=state.logger)

    for line in result.log_lines:
        console.print(line, markup=False, highlight=False)

    if not result.success:
        console.print(f"[red]Error:[/red] {escape(result.error_message)}", highlight=False)
        raise typer.Exit(1)

    state.logger.info(f"{result.summary}: version {result.version_id}")

    # Output version to Concourse using stdout
    print(json.dumps(ReconciliationResult(id=result.version_id).to_output(), indent=2))
