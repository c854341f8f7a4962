"""Main Typer CLI application for the GitHub webhook resource."""

import logging
import sys
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from webhook_resource import __version__
from webhook_resource.config.settings import get_settings

# Create the Typer app
app = typer.Typer(
    name="webhook-resource",
    help="Concourse resource that manages a GitHub repository webhook.",
    no_args_is_help=True,
)

# Concourse only shows stderr to the user; stdout carries the JSON response
console = Console(stderr=True, soft_wrap=True)


# Global state for config
class State:
    debug: bool = False
    timeout: int = 30
    logger: logging.Logger = logging.getLogger("webhook_resource")


state = State()


def setup_logging(debug: bool) -> logging.Logger:
    """Configure logging based on debug flag."""
    logger = logging.getLogger("webhook_resource")
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if debug:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)

    return logger


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"webhook-resource {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
    timeout: Annotated[
        Optional[int],
        typer.Option("--timeout", help="HTTP timeout in seconds for GitHub calls"),
    ] = None,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """GitHub webhook resource - create and delete repository webhooks from Concourse."""
    # Load .env file
    load_dotenv()

    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid settings: {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    # Setup logging
    state.debug = debug or settings.debug
    state.logger = setup_logging(state.debug)
    state.timeout = timeout if timeout is not None else settings.timeout

    if state.debug:
        state.logger.debug("Debug mode enabled")
        state.logger.debug(f"GitHub timeout: {state.timeout}s")


# Import and register subcommands
from webhook_resource.cli.check import check_cmd
from webhook_resource.cli.get import in_cmd
from webhook_resource.cli.out import out_cmd

app.command(name="check")(check_cmd)
app.command(name="in")(in_cmd)
app.command(name="out")(out_cmd)


if __name__ == "__main__":
    app()
