"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Nothing here touches the network: every HTTP exchange goes through an
httpx.MockTransport that records the requests it receives.
"""

import io
import logging
from collections.abc import Callable, Generator

import httpx
import pytest
from rich.console import Console

from keiran_client.core.config import get_app_config
from keiran_client.core.config_schema import ApplicationSchema


# =============================================================================
# Logging Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_root_handlers() -> Generator[None, None, None]:
    """Drop handlers bound to streams a previous test may have closed."""
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def app_settings() -> ApplicationSchema:
    """The packaged application.yaml settings."""
    get_app_config.cache_clear()
    return get_app_config().application


# =============================================================================
# Console Fixtures
# =============================================================================


@pytest.fixture
def record_console() -> Console:
    """
    Console writing into a StringIO.

    Usage:
        def test_render(record_console):
            render_shorten(result, record_console)
            assert "k.cc" in record_console.file.getvalue()
    """
    return Console(file=io.StringIO(), width=200, emoji=False, highlight=False)


# =============================================================================
# HTTP Transport Fixtures
# =============================================================================


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """
    Build a recording transport that always answers the same way.

    Usage:
        transport = make_transport(200, json={"short_url": "https://k.cc/x"})
        transport = make_transport(404, text="not found")
    """

    def _make(status_code: int = 200, **response_kwargs) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status_code, **response_kwargs))

    return _make
