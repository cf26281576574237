"""
Operation Schemas.

One Operation is resolved from the command line per invocation and
handed to the matching command. Operations are immutable.
"""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _OperationBase(BaseModel):
    """Frozen base so an operation cannot change after resolution."""

    model_config = ConfigDict(frozen=True)


class UploadOperation(_OperationBase):
    """Upload a local file."""

    kind: Literal["upload"] = "upload"
    path: str = Field(min_length=1)
    keep_long: bool = False


class ShortenOperation(_OperationBase):
    """Shorten a URL."""

    kind: Literal["shorten"] = "shorten"
    url: str = Field(min_length=1)
    keep_long: bool = False


class StatsOperation(_OperationBase):
    """Fetch aggregate usage statistics."""

    kind: Literal["stats"] = "stats"


Operation = Union[UploadOperation, ShortenOperation, StatsOperation]
