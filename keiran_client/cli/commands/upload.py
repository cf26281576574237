"""
Upload Command.

Streams a local file to POST /upload and prints the resulting URL.
"""

import os
from collections.abc import Callable

from rich.console import Console

from keiran_client.cli.client import APIClient
from keiran_client.cli.encoder import DEFAULT_CHUNK_SIZE, encode_upload, open_upload_file
from keiran_client.cli.interpreter import interpret_upload
from keiran_client.cli.progress import NullProgress, UploadProgress
from keiran_client.core.logging import get_logger, log_with_source
from keiran_client.schemas.operation import UploadOperation
from keiran_client.schemas.response import ServerResponse

logger = get_logger(__name__)

ProgressFactory = Callable[[int], UploadProgress | NullProgress]


async def upload(
    operation: UploadOperation,
    client: APIClient,
    console: Console,
    *,
    timeout: float,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    progress_factory: ProgressFactory = NullProgress,
) -> ServerResponse:
    """
    Upload one file.

    The file stays open only for the duration of the request and the
    progress bar is finished before the result is printed.

    Raises:
        FileError, NetworkError, ServerError, ProtocolError
    """
    with open_upload_file(operation.path) as (fileobj, size):
        log_with_source(
            logger,
            "cli",
            "info",
            "Uploading file",
            filename=os.path.basename(operation.path),
            size=size,
            keep_long=operation.keep_long,
        )
        with progress_factory(size) as progress:
            request = encode_upload(
                operation,
                fileobj,
                size,
                timeout=timeout,
                chunk_size=chunk_size,
                on_chunk=progress.advance,
            )
            response = await client.request(request.method, request.path, **request.as_kwargs())

    return interpret_upload(response, console)
