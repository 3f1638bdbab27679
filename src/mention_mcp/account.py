"""Cached account context for the authenticated caller."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from .client import MentionClient
from .consts import ACCOUNT_CACHE_TTL_MINUTES, ACCOUNT_ME_PATH
from .models import AccountResponse, parse_response

logger = logging.getLogger("mention-mcp.account")


def utc_now() -> datetime:
    return datetime.now(UTC)


class AccountCache:
    """Single-entry, time-bounded cache of the account identity.

    Responsibilities:
    - Fetch GET /accounts/me lazily, on first demand or after expiry
    - Serve the cached account while it is younger than the TTL
    - Allow explicit invalidation

    Concurrent first-time callers may each trigger a fetch; the identity
    endpoint is idempotent so the last writer wins.
    """

    def __init__(
        self,
        client: MentionClient,
        ttl: timedelta = timedelta(minutes=ACCOUNT_CACHE_TTL_MINUTES),
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize AccountCache.

        Args:
            client: MentionClient used for the identity request.
            ttl: How long a fetched account stays valid.
            clock: Returns the current time; injectable for tests.
        """
        self.client = client
        self.ttl = ttl
        self.clock = clock
        self._account: AccountResponse | None = None
        self._expires_at: datetime | None = None

    def _is_fresh(self) -> bool:
        if self._account is None or self._expires_at is None:
            return False
        return self.clock() < self._expires_at

    async def get_account_info(self) -> AccountResponse:
        """Get the account context, fetching it if absent or expired.

        Returns:
            Validated AccountResponse.

        Raises:
            UpstreamShapeError: If the identity response has an unexpected shape.
            MentionMCPError: Any request failure from MentionClient.request.
        """
        if self._is_fresh():
            logger.debug("Using cached account info")
            return self._account

        try:
            payload = await self.client.request(ACCOUNT_ME_PATH)
            account = parse_response(AccountResponse, payload)
        except Exception as e:
            logger.error(f"Failed to get account info: {e}")
            raise

        self._account = account
        self._expires_at = self.clock() + self.ttl
        logger.debug(f"Account info retrieved and cached (account {account.account.id})")
        return account

    async def get_account_id(self) -> str:
        """Get the account identifier used in /accounts/{id} paths."""
        account = await self.get_account_info()
        return account.account.id

    def clear(self) -> None:
        """Invalidate the cached account; the next read refetches it."""
        self._account = None
        self._expires_at = None
        logger.debug("Account cache cleared")
