"""
Response Schemas.

Shapes of the JSON bodies the server returns on success.
Every key is optional; a missing or null key decodes to its empty value.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ServerResponse(BaseModel):
    """Body returned by /upload and /shorten."""

    message: str = ""
    short_url: str = ""
    filename: str = ""
    id: str = ""
    url: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("message", "short_url", "filename", "id", "url", mode="before")
    @classmethod
    def _null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class StatsResponse(BaseModel):
    """Body returned by /stats?format=json."""

    files: int = 0
    urls: int = 0

    model_config = ConfigDict(extra="ignore")

    @field_validator("files", "urls", mode="before")
    @classmethod
    def _null_as_zero(cls, v: Any) -> Any:
        return 0 if v is None else v
