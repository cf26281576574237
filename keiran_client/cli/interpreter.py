"""
Response Interpreter.

Decodes server replies and renders them for the user.

Error bodies (non-2xx) are never JSON decoded; they are surfaced
verbatim through ServerError. Success bodies that are not the expected
JSON shape raise ProtocolError before anything is printed, so the user
never sees a half-rendered result.
"""

import httpx
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.markup import escape

from keiran_client.core.exceptions import ProtocolError, ServerError
from keiran_client.schemas.response import ServerResponse, StatsResponse


def ensure_success(response: httpx.Response) -> None:
    """Raise ServerError with the raw body for any non-2xx status."""
    if not response.is_success:
        raise ServerError(response.status_code, response.text)


def _describe(error: ValidationError) -> str:
    """First validation problem, in one line."""
    errors = error.errors()
    if not errors:
        return str(error)
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first['msg']}" if location else first["msg"]


def _decode(response: httpx.Response, schema: type[BaseModel], what: str) -> BaseModel:
    try:
        return schema.model_validate_json(response.content)
    except ValidationError as e:
        raise ProtocolError(f"error parsing {what}: {_describe(e)}") from e


def decode_server_response(response: httpx.Response) -> ServerResponse:
    """Decode an /upload or /shorten success body."""
    return _decode(response, ServerResponse, "response")


def decode_stats(response: httpx.Response) -> StatsResponse:
    """Decode a /stats success body."""
    return _decode(response, StatsResponse, "stats")


def render_upload(result: ServerResponse, console: Console) -> None:
    console.print()
    console.print("✨ Success! Your file has been uploaded")
    console.print(f"📎 URL: {escape(result.url)}", soft_wrap=True)
    if result.id:
        console.print(f"🔑 ID: {escape(result.id)}", soft_wrap=True)


def render_shorten(result: ServerResponse, console: Console) -> None:
    console.print("✨ Success! Your URL has been shortened")
    console.print(f"🔗 Short URL: {escape(result.short_url)}", soft_wrap=True)


def render_stats(stats: StatsResponse, console: Console) -> None:
    console.print("📊 Statistics:")
    console.print(f"Files stored: {stats.files}")
    console.print(f"URLs shortened: {stats.urls}")


def interpret_upload(response: httpx.Response, console: Console) -> ServerResponse:
    """Check, decode and render an upload reply."""
    ensure_success(response)
    result = decode_server_response(response)
    render_upload(result, console)
    return result


def interpret_shorten(response: httpx.Response, console: Console) -> ServerResponse:
    """Check, decode and render a shorten reply."""
    ensure_success(response)
    result = decode_server_response(response)
    render_shorten(result, console)
    return result


def interpret_stats(response: httpx.Response, console: Console) -> StatsResponse:
    """Check, decode and render a stats reply."""
    ensure_success(response)
    stats = decode_stats(response)
    render_stats(stats, console)
    return stats
