"""Pytest configuration."""

from unittest.mock import MagicMock

import pytest


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture(params=["asyncio"])
def anyio_backend(request):
    """Only use asyncio backend for async tests."""
    return request.param


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch):
    """Reset global config and metrics between tests."""
    monkeypatch.setenv("DBCOMMON_SERVICE_NAME", "test-service")
    monkeypatch.setenv("DBCOMMON_ENVIRONMENT", "test")

    from dbcommon.database import config as config_module
    from dbcommon.database import metrics as metrics_module

    config_module._diagnostics_config = None
    metrics_module._metrics_client = None
    yield
    config_module._diagnostics_config = None
    metrics_module._metrics_client = None


@pytest.fixture
def statsd():
    """Install a metrics client backed by a mocked DogStatsd."""
    from dbcommon.database import metrics as metrics_module

    client = MagicMock()
    metrics_module._metrics_client = metrics_module.DatabaseMetrics(client)
    return client
