"""
Integration Test Fixtures.

Runs the Typer app end to end; only the HTTP transport is replaced.
"""

from collections.abc import Callable
from functools import partial

import pytest
from typer.testing import CliRunner

from keiran_client.cli.client import APIClient


# =============================================================================
# CLI Fixtures
# =============================================================================


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def mock_server(monkeypatch, make_transport) -> Callable:
    """
    Point the CLI at a recording transport.

    Usage:
        def test_stats(runner, mock_server):
            transport = mock_server(200, json={"files": 1, "urls": 2})
            result = runner.invoke(app, ["stats"])
            assert transport.requests[0].url.path == "/stats"
    """

    def _install(status_code: int = 200, **response_kwargs):
        transport = make_transport(status_code, **response_kwargs)
        monkeypatch.setattr(
            "keiran_client.cli.app.APIClient",
            partial(APIClient, transport=transport),
        )
        return transport

    return _install
