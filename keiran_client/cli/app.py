"""
CLI Entry Point.

Typer handles the global options (--verbose, --debug, --no-progress,
--version, --help); everything after the first positional argument is
handed untouched to the command resolver, which owns the
upload/shorten/stats grammar and the "guess what I meant" inference.

Usage:
    client upload [-long] <file_path>
    client shorten [-long] <url>
    client stats
    client <file_path>       # inferred upload
    client <url>             # inferred shorten
"""

import asyncio
from functools import partial

import typer
from rich.console import Console

from keiran_client import __version__
from keiran_client.cli.client import APIClient
from keiran_client.cli.commands import ProgressFactory, execute
from keiran_client.cli.progress import NullProgress, UploadProgress
from keiran_client.cli.resolver import USAGE, resolve_operation
from keiran_client.core.config import get_app_config
from keiran_client.core.config_schema import ApplicationSchema
from keiran_client.core.exception_handlers import INTERRUPTED_EXIT_CODE, handle_error
from keiran_client.core.exceptions import ApplicationError
from keiran_client.core.logging import get_logger, log_with_source, setup_logging
from keiran_client.schemas.operation import Operation

logger = get_logger(__name__)

app = typer.Typer(
    name="client",
    help="Upload files, shorten URLs and show usage stats.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console(emoji=False, highlight=False)
err_console = Console(stderr=True, emoji=False, highlight=False)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"keiran-client {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, debug: bool) -> None:
    """Always route logs to stderr; flags only raise the level."""
    if debug:
        setup_logging(level="DEBUG")
    elif verbose:
        setup_logging(level="INFO")
    else:
        setup_logging()


def build_progress_factory(settings: ApplicationSchema, disabled: bool = False) -> ProgressFactory:
    """Pick the progress reporter for uploads."""
    if disabled or not settings.progress.enabled:
        return NullProgress
    return partial(
        UploadProgress,
        console=err_console,
        throttle_seconds=settings.progress.throttle_ms / 1000,
    )


async def _run(
    operation: Operation,
    settings: ApplicationSchema,
    progress_factory: ProgressFactory,
) -> None:
    async with APIClient(
        base_url=settings.server.base_url,
        timeout=settings.timeouts.request,
    ) as client:
        await execute(operation, client, console, settings, progress_factory)


@app.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    },
)
def main(
    args: list[str] | None = typer.Argument(
        None,
        help="upload [-long] <file_path> | shorten [-long] <url> | stats | <file_path> | <url>",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
    no_progress: bool = typer.Option(
        False,
        "--no-progress",
        help="Do not draw the upload progress bar",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the client version and exit",
    ),
) -> None:
    """
    Upload files, shorten URLs and show usage stats.

    Give a command, or just a file path or URL and the client works out
    which one you meant.
    """
    _configure_logging(verbose, debug)

    if not args:
        console.print(USAGE, markup=False)
        return

    settings = get_app_config().application

    try:
        operation = resolve_operation(args)
        log_with_source(logger, "cli", "debug", "Operation resolved", operation=operation.kind)
        asyncio.run(_run(operation, settings, build_progress_factory(settings, no_progress)))
    except ApplicationError as exc:
        raise typer.Exit(handle_error(exc, console, err_console))
    except KeyboardInterrupt:
        log_with_source(logger, "cli", "warning", "Interrupted")
        err_console.print("Interrupted")
        raise typer.Exit(INTERRUPTED_EXIT_CODE)


def run() -> None:
    """Console script entry point."""
    app(prog_name="client")


if __name__ == "__main__":
    run()
