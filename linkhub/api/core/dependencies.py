"""Dependency injection utilities for FastAPI"""

import logging

from linkhub.api.core.config import get_settings
from linkhub.api.services.live_status import LiveStatusService
from linkhub.shared.token_cache import TokenCache
from linkhub.shared.twitch_api import TwitchAPIClient

logger = logging.getLogger(__name__)


# ============================================
# Service Dependencies
# ============================================


_twitch_api: TwitchAPIClient | None = None
_live_status_service: LiveStatusService | None = None


def get_twitch_api() -> TwitchAPIClient:
    """Get shared TwitchAPIClient singleton (connection reuse)."""
    global _twitch_api
    if _twitch_api is None:
        settings = get_settings()
        _twitch_api = TwitchAPIClient(
            client_id=settings.twitch_client_id,
            client_secret=settings.twitch_client_secret,
            timeout=settings.upstream_timeout,
        )
    return _twitch_api


def get_live_status_service() -> LiveStatusService:
    """Get the process-wide LiveStatusService (owns the app token cache)."""
    global _live_status_service
    if _live_status_service is None:
        settings = get_settings()
        twitch_api = get_twitch_api()
        _live_status_service = LiveStatusService(
            twitch_api=twitch_api,
            token_cache=TokenCache(
                twitch_api.request_app_token, ttl=settings.token_ttl_seconds
            ),
            user_id=settings.twitch_user_id,
            cache_seconds=settings.live_cache_seconds,
        )
    return _live_status_service


async def close_twitch_api() -> None:
    """Close the shared TwitchAPIClient and drop the token cache. Call on app shutdown."""
    global _twitch_api, _live_status_service
    if _twitch_api is not None:
        await _twitch_api.close()
        _twitch_api = None
    _live_status_service = None
