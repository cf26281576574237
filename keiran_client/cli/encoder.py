"""
Transfer Encoder.

Builds the outgoing request for each operation:

- upload:  POST /upload, streamed multipart/form-data body
- shorten: POST /shorten, JSON {"url": ..., "long": ...}
- stats:   GET /stats?format=json

The retention flag is encoded differently per operation: the upload
form carries `long=true` only when requested, the shorten document
always carries an explicit boolean.
"""

import os
import secrets
from collections.abc import AsyncIterator, Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, BinaryIO

from keiran_client.core.exceptions import FileError
from keiran_client.schemas.operation import ShortenOperation, UploadOperation

DEFAULT_CHUNK_SIZE = 64 * 1024

_CRLF = b"\r\n"


@dataclass(frozen=True)
class EncodedRequest:
    """Everything the request sender needs for one call."""

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] | None = None
    content: Any = None
    json: dict[str, Any] | None = None
    timeout: float | None = None
    deadline: float | None = None

    def as_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for APIClient.request, without unset entries."""
        kwargs: dict[str, Any] = {}
        if self.headers:
            kwargs["headers"] = self.headers
        if self.params is not None:
            kwargs["params"] = self.params
        if self.content is not None:
            kwargs["content"] = self.content
        if self.json is not None:
            kwargs["json"] = self.json
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.deadline is not None:
            kwargs["deadline"] = self.deadline
        return kwargs


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


class MultipartFileBody:
    """
    Streamed multipart/form-data body with one file part.

    Scalar fields are written first, then the file part. The body length
    is known before streaming starts so the request carries a real
    Content-Length instead of chunked encoding.

    Usage:
        body = MultipartFileBody(f, "report.pdf", size, fields={"long": "true"})
        await client.post("/upload", content=body, headers=body.headers)
    """

    def __init__(
        self,
        fileobj: BinaryIO,
        filename: str,
        size: int,
        fields: dict[str, str] | None = None,
        file_field: str = "file",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        on_chunk: Callable[[int], None] | None = None,
        boundary: str | None = None,
    ) -> None:
        self.fileobj = fileobj
        self.filename = filename
        self.size = size
        self.chunk_size = chunk_size
        self.on_chunk = on_chunk
        self.boundary = boundary or secrets.token_hex(30)

        delimiter = b"--" + self.boundary.encode("ascii")
        preamble = bytearray()
        for name, value in (fields or {}).items():
            preamble += delimiter + _CRLF
            preamble += f'Content-Disposition: form-data; name="{_quote(name)}"'.encode() + _CRLF
            preamble += _CRLF + value.encode("utf-8") + _CRLF
        preamble += delimiter + _CRLF
        preamble += (
            f'Content-Disposition: form-data; name="{_quote(file_field)}"; '
            f'filename="{_quote(filename)}"'
        ).encode("utf-8") + _CRLF
        preamble += b"Content-Type: application/octet-stream" + _CRLF + _CRLF

        self._preamble = bytes(preamble)
        self._epilogue = _CRLF + delimiter + b"--" + _CRLF

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    @property
    def content_length(self) -> int:
        return len(self._preamble) + self.size + len(self._epilogue)

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": self.content_type,
            "Content-Length": str(self.content_length),
        }

    def iter_chunks(self) -> Iterator[bytes]:
        """Yield the encoded body; the tap sees every file chunk."""
        yield self._preamble
        while True:
            chunk = self.fileobj.read(self.chunk_size)
            if not chunk:
                break
            if self.on_chunk is not None:
                self.on_chunk(len(chunk))
            yield chunk
        yield self._epilogue

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self.iter_chunks():
            yield chunk


@contextmanager
def open_upload_file(path: str) -> Iterator[tuple[BinaryIO, int]]:
    """
    Open a file for upload and report its size.

    The file is closed when the block exits, on success or error.

    Raises:
        FileError: If the file cannot be opened or stat'ed
    """
    try:
        fileobj = open(path, "rb")
    except OSError as e:
        raise FileError(f"couldn't open file: {e}", path=path) from e

    with fileobj:
        try:
            size = os.fstat(fileobj.fileno()).st_size
        except OSError as e:
            raise FileError(f"couldn't get file info: {e}", path=path) from e
        yield fileobj, size


def encode_upload(
    operation: UploadOperation,
    fileobj: BinaryIO,
    size: int,
    *,
    timeout: float,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    on_chunk: Callable[[int], None] | None = None,
) -> EncodedRequest:
    """
    Build the multipart upload request. Only the base name leaves the machine.

    `timeout` bounds each httpx phase and also the whole exchange.
    """
    fields = {"long": "true"} if operation.keep_long else {}
    body = MultipartFileBody(
        fileobj,
        os.path.basename(operation.path),
        size,
        fields=fields,
        chunk_size=chunk_size,
        on_chunk=on_chunk,
    )
    return EncodedRequest(
        method="POST",
        path="/upload",
        headers=body.headers,
        content=body,
        timeout=timeout,
        deadline=timeout,
    )


def encode_shorten(operation: ShortenOperation) -> EncodedRequest:
    """Build the JSON shorten request; `long` is always explicit."""
    return EncodedRequest(
        method="POST",
        path="/shorten",
        json={"url": operation.url, "long": operation.keep_long},
    )


def encode_stats() -> EncodedRequest:
    """Build the stats request."""
    return EncodedRequest(method="GET", path="/stats", params={"format": "json"})
