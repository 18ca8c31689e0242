"""In-process app access token cache.

Holds at most one token per upstream platform. The current time is passed in
by the caller so that expiry is a pure comparison and can be driven in tests.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from .models import AuthToken

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_TTL = 3600.0


def is_expired(expires_at: float, now: float) -> bool:
    """A token is unusable from its expiry instant onwards."""
    return now >= expires_at


class TokenCache:
    """Lazily acquires and caches a bearer token with a fixed TTL.

    The TTL is applied from the time of issue regardless of the validity the
    upstream reports. Refresh is serialized by a lock with a double check, so
    requests that race on an expired token share a single acquisition.
    Requests holding a valid token never touch the lock.
    """

    def __init__(
        self,
        fetch_token: Callable[[], Awaitable[str]],
        ttl: float = DEFAULT_TOKEN_TTL,
    ):
        self._fetch_token = fetch_token
        self._ttl = ttl
        self._token: AuthToken | None = None
        self._lock = asyncio.Lock()

    @property
    def token(self) -> AuthToken | None:
        return self._token

    def peek(self, now: float) -> str | None:
        """Return the cached token value if it is still valid at *now*."""
        if self._token is not None and not is_expired(self._token.expires_at, now):
            return self._token.value
        return None

    async def acquire(self, now: float) -> str:
        """Return a valid token, fetching a new one only when absent or expired.

        Raises whatever *fetch_token* raises (normally ``AuthError`` or
        ``ConfigMissing``); the cache is left unchanged in that case.
        """
        cached = self.peek(now)
        if cached is not None:
            return cached

        async with self._lock:
            # Double-check after acquiring lock
            cached = self.peek(now)
            if cached is not None:
                return cached

            value = await self._fetch_token()
            self._token = AuthToken(value=value, expires_at=now + self._ttl)
            logger.debug(f"Cached new app token, expires_at={self._token.expires_at:.0f}")
            return value

    def invalidate(self) -> None:
        """Drop the cached token so the next acquire re-authenticates."""
        self._token = None
