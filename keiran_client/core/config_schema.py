"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in a command.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema  → application.yaml
    LoggingSchema      → logging.yaml
"""

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    base_url: str


class TimeoutsSchema(_StrictBase):
    upload: float = Field(gt=0)
    # None keeps the httpx default
    request: float | None = None


class UploadSchema(_StrictBase):
    chunk_size: int = Field(gt=0)


class ProgressSchema(_StrictBase):
    enabled: bool
    throttle_ms: int = Field(ge=0)


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    server: ServerSchema
    timeouts: TimeoutsSchema
    upload: UploadSchema
    progress: ProgressSchema


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema
