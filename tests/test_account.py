"""Tests for the account context cache"""

from datetime import timedelta

import pytest

from mention_mcp.account import AccountCache
from mention_mcp.consts import ACCOUNT_ME_PATH
from mention_mcp.exceptions import NetworkError, UpstreamShapeError

from tests.conftest import ACCOUNT_ID, ACCOUNT_PAYLOAD


def identity_calls(mock_client) -> int:
    return sum(
        1 for call in mock_client.request.call_args_list if call.args[0] == ACCOUNT_ME_PATH
    )


class TestAccountCache:
    @pytest.mark.asyncio
    async def test_fetches_once_within_ttl(self, account_cache, mock_client):
        first = await account_cache.get_account_info()
        second = await account_cache.get_account_info()

        assert first is second
        assert first.account.id == ACCOUNT_ID
        assert identity_calls(mock_client) == 1

    @pytest.mark.asyncio
    async def test_get_account_id(self, account_cache):
        assert await account_cache.get_account_id() == ACCOUNT_ID

    @pytest.mark.asyncio
    async def test_still_cached_before_expiry(self, account_cache, mock_client, clock):
        await account_cache.get_account_info()
        clock.advance(minutes=4, seconds=59)
        await account_cache.get_account_info()

        assert identity_calls(mock_client) == 1

    @pytest.mark.asyncio
    async def test_refetches_at_expiry(self, account_cache, mock_client, clock):
        await account_cache.get_account_info()
        clock.advance(minutes=5)
        await account_cache.get_account_info()

        assert identity_calls(mock_client) == 2

    @pytest.mark.asyncio
    async def test_clear_forces_refetch(self, account_cache, mock_client):
        await account_cache.get_account_info()
        account_cache.clear()
        await account_cache.get_account_info()

        assert identity_calls(mock_client) == 2

    @pytest.mark.asyncio
    async def test_custom_ttl(self, mock_client, clock):
        cache = AccountCache(mock_client, ttl=timedelta(seconds=30), clock=clock)
        await cache.get_account_info()
        clock.advance(seconds=31)
        await cache.get_account_info()

        assert identity_calls(mock_client) == 2

    @pytest.mark.asyncio
    async def test_failure_not_cached(self, account_cache, mock_client):
        mock_client.request.side_effect = NetworkError("Network request failed: down")

        with pytest.raises(NetworkError):
            await account_cache.get_account_info()

        mock_client.request.side_effect = None
        mock_client.request.return_value = ACCOUNT_PAYLOAD
        account = await account_cache.get_account_info()

        assert account.account.id == ACCOUNT_ID
        assert mock_client.request.call_count == 2

    @pytest.mark.asyncio
    async def test_unexpected_shape(self, account_cache, mock_client):
        mock_client.request.side_effect = None
        mock_client.request.return_value = {"account": {"id": "x"}}

        with pytest.raises(UpstreamShapeError) as exc_info:
            await account_cache.get_account_info()

        assert "AccountResponse" in exc_info.value.message
        assert any("subscription" in e for e in exc_info.value.errors)
