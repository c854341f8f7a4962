"""Check step: the resource is put-only, so there are never new versions."""

import json
import sys

import typer
from rich.console import Console
from rich.markup import escape

from webhook_resource.config.settings import ConfigurationError
from webhook_resource.resource.models import parse_version_request

console = Console(stderr=True, soft_wrap=True)


def check_cmd() -> None:
    """Report no versions."""
    from webhook_resource.cli.main import state

    try:
        request = parse_version_request(sys.stdin.read())
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    state.logger.debug(f"check called with version={request.version}")
    print(json.dumps([]))
