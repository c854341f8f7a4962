"""Get step: echo the requested version back to Concourse."""

import json
import sys
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from webhook_resource.config.settings import ConfigurationError
from webhook_resource.resource.models import parse_version_request

console = Console(stderr=True, soft_wrap=True)


def in_cmd(
    destination: Annotated[
        Optional[str],
        typer.Argument(help="Destination directory passed by Concourse (unused)"),
    ] = None,
) -> None:
    """Return the version that was asked for; there is nothing to fetch."""
    from webhook_resource.cli.main import state

    try:
        request = parse_version_request(sys.stdin.read())
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    version = request.version or {"id": "none"}
    state.logger.debug(f"in called with version={version}, destination={destination}")

    print(json.dumps({"version": version, "metadata": []}, indent=2))
