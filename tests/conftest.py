"""
Shared pytest configuration and fixtures for NSX client tests.

This module provides common fixtures used across all test modules including:
- NSX connection configurations
- A recording mock HTTP transport
- Client factories wired to the mock transport
"""

from typing import Any

import pytest

from src.nsx_client.core import NSXClient, NSXConfig

from fixtures.mock_transport import MockTransport

# ========== Configuration Fixtures ==========


@pytest.fixture
def nsx_config() -> NSXConfig:
    """Provide an NSX configuration for testing."""
    return NSXConfig(
        url="https://nsx.example.com",
        username="admin",
        password="test_password_123",
        verify_ssl=False,  # Disable SSL verification for tests
    )


@pytest.fixture(autouse=True)
def clean_nsx_env(monkeypatch):
    """Keep NSX_* variables of the developer's shell out of the tests."""
    for name in ("NSX_MANAGER_URL", "NSX_USERNAME", "NSX_PASSWORD", "NSX_VERIFY_SSL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_client(nsx_config):
    """Provide a factory returning (client, transport) for a response mapping."""
    clients = []

    def _make(responses: dict[tuple[str, str], Any] = None):
        transport = MockTransport(responses)
        client = NSXClient(nsx_config, transport=transport)
        clients.append(client)
        return client, transport

    yield _make

    for client in clients:
        client.close()


# ========== Pytest Configuration ==========


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
