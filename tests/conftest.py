"""Pytest configuration and shared fixtures"""

import os
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from mention_mcp.account import AccountCache
from mention_mcp.client import MentionClient
from mention_mcp.config import Config
from mention_mcp.consts import ACCOUNT_ME_PATH
from mention_mcp.tools import ToolRegistry

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)

BASE_URL = "https://api.mention.test/api"
ACCOUNT_ID = "test-account"

ACCOUNT_PAYLOAD = {
    "account": {
        "id": ACCOUNT_ID,
        "name": "Test Account",
        "email": "owner@example.com",
        "subscription": {"plan": "company", "advanced_query_access": True},
        "groups": [
            {"id": "group-1", "name": "Marketing", "created_at": "2024-01-01"},
            {"id": "group-2", "name": "Support", "created_at": "2024-02-01"},
        ],
    }
}

ENV_PREFIXES = ("MENTION_", "MCP_")


class FakeClock:
    """Controllable clock for TTL tests."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove MENTION_* and MCP_* environment variables for the test.

    This ensures Config tests see the true defaults without interference
    from environment variables that might be set in the user's shell.
    """
    for key in list(os.environ):
        if key.startswith(ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config():
    """Config fixture with explicit test values"""
    return Config(
        api_key="test-key",
        base_url=BASE_URL,
        log_level="DEBUG",
        request_timeout_ms=5000,
    )


@pytest.fixture
def make_client(config):
    """Factory building a MentionClient backed by an httpx.MockTransport"""

    def factory(handler, **config_overrides) -> MentionClient:
        client_config = (
            config.model_copy(update=config_overrides) if config_overrides else config
        )
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return MentionClient(client_config, http_client=http_client)

    return factory


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mock_client(config):
    """MentionClient whose request method is an AsyncMock.

    /accounts/me is answered with ACCOUNT_PAYLOAD; other endpoints return
    whatever `request_result` is set to on the mock.
    """
    client = Mock(spec=MentionClient)
    client.config = config
    client.request_result = {}

    async def request(endpoint, method="GET", *, json_body=None, headers=None):
        if endpoint == ACCOUNT_ME_PATH:
            return ACCOUNT_PAYLOAD
        return client.request_result

    client.request = AsyncMock(side_effect=request)
    return client


@pytest.fixture
def account_cache(mock_client, clock):
    return AccountCache(mock_client, clock=clock)


@pytest.fixture
def registry(mock_client, account_cache):
    return ToolRegistry(mock_client, account_cache)


@pytest.fixture
def api_calls(mock_client):
    """Returns (endpoint, method, json_body) of every non-identity request made"""

    def collect():
        calls = []
        for call in mock_client.request.call_args_list:
            endpoint = call.args[0]
            if endpoint == ACCOUNT_ME_PATH:
                continue
            method = call.args[1] if len(call.args) > 1 else call.kwargs.get("method", "GET")
            calls.append((endpoint, method, call.kwargs.get("json_body")))
        return calls

    return collect
