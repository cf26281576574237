"""
Schemas.

Operations resolved from the command line and server response bodies.
"""

from keiran_client.schemas.operation import (
    Operation,
    ShortenOperation,
    StatsOperation,
    UploadOperation,
)
from keiran_client.schemas.response import ServerResponse, StatsResponse

__all__ = [
    "Operation",
    "ServerResponse",
    "ShortenOperation",
    "StatsOperation",
    "StatsResponse",
    "UploadOperation",
]
