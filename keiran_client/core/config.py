"""
Configuration Management.

Loads settings from config/settings/*.yaml shipped inside the package.
No hardcoded values in code: the server URL, timeouts and progress
tuning all come from these files.

Settings (YAML):
    application.yaml   - Client identity, server URL, timeouts, upload, progress
    logging.yaml       - Logging configuration
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from keiran_client.core.config_schema import ApplicationSchema, LoggingSchema

SETTINGS_DIR = Path(__file__).resolve().parent.parent / "config" / "settings"


def load_yaml_config(filename: str, settings_dir: Path | None = None) -> dict[str, Any]:
    """Load a YAML configuration file from config/settings/."""
    config_path = (settings_dir or SETTINGS_DIR) / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_validated(schema_cls: type, filename: str, settings_dir: Path | None = None) -> Any:
    """Load YAML and validate against schema. Returns typed model instance."""
    raw = load_yaml_config(filename, settings_dir)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(
            f"Invalid configuration in {filename}:\n{e}"
        ) from e


class AppConfig:
    """
    Client configuration loaded from YAML files.

    Each YAML file is validated against its Pydantic schema at load time.
    Missing keys, wrong types, or unknown fields raise a clear error
    immediately instead of failing halfway through an upload.

    Properties return typed Pydantic model instances with attribute access.
    """

    def __init__(self, settings_dir: Path | None = None) -> None:
        self._application = _load_validated(ApplicationSchema, "application.yaml", settings_dir)
        self._logging = _load_validated(LoggingSchema, "logging.yaml", settings_dir)

    @property
    def application(self) -> ApplicationSchema:
        """Application settings."""
        return self._application

    @property
    def logging(self) -> LoggingSchema:
        """Logging settings."""
        return self._logging


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_server_base_url() -> tuple[str, float | None]:
    """
    Get the server base URL and default request timeout from application.yaml.

    Returns:
        Tuple of (base_url, timeout_seconds). The timeout is None when the
        transport default should apply.
    """
    app = get_app_config().application
    return app.server.base_url.rstrip("/"), app.timeouts.request
