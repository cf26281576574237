"""
Shorten Command.

Sends a URL to POST /shorten and prints the short URL.
"""

from rich.console import Console

from keiran_client.cli.client import APIClient
from keiran_client.cli.encoder import encode_shorten
from keiran_client.cli.interpreter import interpret_shorten
from keiran_client.core.logging import get_logger, log_with_source
from keiran_client.schemas.operation import ShortenOperation
from keiran_client.schemas.response import ServerResponse

logger = get_logger(__name__)


async def shorten(
    operation: ShortenOperation,
    client: APIClient,
    console: Console,
) -> ServerResponse:
    """Shorten one URL. Uses the client's default timeout."""
    log_with_source(
        logger,
        "cli",
        "info",
        "Shortening URL",
        url=operation.url,
        keep_long=operation.keep_long,
    )
    request = encode_shorten(operation)
    response = await client.request(request.method, request.path, **request.as_kwargs())
    return interpret_shorten(response, console)
