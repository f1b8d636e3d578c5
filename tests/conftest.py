"""
Test configuration and fixtures for the Outline MCP server tests.

This file provides shared fixtures, mocks, and test utilities that can be used
across all test modules.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from outline_mcp.config import Settings
from outline_mcp.main import create_app
from outline_mcp.services.outline import OutlineService
from outline_mcp.utils.config_guard import OutlineConfig
from outline_mcp.utils.http_client import HttpClient, TransportResponse

TEST_BASE_URL = "https://test.example.com/"
TEST_TOKEN = "test-token"
SEARCH_RESPONSE = '{"results": []}'


@pytest.fixture
def outline_config():
    """Valid configuration pointing at a fake HTTPS Outline instance."""
    return OutlineConfig(base_url=TEST_BASE_URL, api_token=TEST_TOKEN)


@pytest.fixture
def mock_http_client():
    """Transport double; every call succeeds with an empty search result."""
    mock = AsyncMock(spec=HttpClient)
    mock.send.return_value = TransportResponse(status_code=200, text=SEARCH_RESPONSE)
    return mock


@pytest.fixture
def service(outline_config, mock_http_client):
    return OutlineService(config=outline_config, client=mock_http_client)


@pytest.fixture
def test_settings(monkeypatch):
    """Settings built from explicit values, ignoring any local .env file."""
    for name in ("OUTLINE_BASE_URL", "OUTLINE_API_TOKEN", "LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    return Settings(
        _env_file=None,
        OUTLINE_BASE_URL=TEST_BASE_URL,
        OUTLINE_API_TOKEN=TEST_TOKEN,
        REQUEST_TIMEOUT=5.0,
    )


@pytest.fixture
def app(test_settings, mock_http_client):
    """Create FastAPI app instance for testing."""
    return create_app(settings=test_settings, http_client=mock_http_client)


@pytest.fixture
def client(app):
    """Create test client for HTTP requests."""
    with TestClient(app) as test_client:
        yield test_client


# Test markers
def pytest_configure(config):
    """Configure custom test markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
