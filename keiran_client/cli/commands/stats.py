"""
Stats Command.

Fetches aggregate counts from GET /stats?format=json.
"""

from rich.console import Console

from keiran_client.cli.client import APIClient
from keiran_client.cli.encoder import encode_stats
from keiran_client.cli.interpreter import interpret_stats
from keiran_client.schemas.response import StatsResponse


async def stats(client: APIClient, console: Console) -> StatsResponse:
    """Fetch and print file and URL counts."""
    request = encode_stats()
    response = await client.request(request.method, request.path, **request.as_kwargs())
    return interpret_stats(response, console)
