"""
CLI Commands.

One module per operation. `execute` routes a resolved Operation to its
command; exactly one runs per invocation.
"""

from rich.console import Console

from keiran_client.cli.client import APIClient
from keiran_client.cli.commands.shorten import shorten
from keiran_client.cli.commands.stats import stats
from keiran_client.cli.commands.upload import ProgressFactory, upload
from keiran_client.cli.progress import NullProgress
from keiran_client.core.config_schema import ApplicationSchema
from keiran_client.schemas.operation import (
    Operation,
    ShortenOperation,
    StatsOperation,
    UploadOperation,
)
from keiran_client.schemas.response import ServerResponse, StatsResponse


async def execute(
    operation: Operation,
    client: APIClient,
    console: Console,
    settings: ApplicationSchema,
    progress_factory: ProgressFactory = NullProgress,
) -> ServerResponse | StatsResponse:
    """Run one operation against the server."""
    if isinstance(operation, UploadOperation):
        return await upload(
            operation,
            client,
            console,
            timeout=settings.timeouts.upload,
            chunk_size=settings.upload.chunk_size,
            progress_factory=progress_factory,
        )
    if isinstance(operation, ShortenOperation):
        return await shorten(operation, client, console)
    if isinstance(operation, StatsOperation):
        return await stats(client, console)
    raise TypeError(f"Unsupported operation: {type(operation).__name__}")


__all__ = [
    "ProgressFactory",
    "execute",
    "shorten",
    "stats",
    "upload",
]
