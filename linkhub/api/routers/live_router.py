"""Twitch live-status API routes"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from linkhub.api.core.dependencies import get_live_status_service
from linkhub.api.services.live_status import LiveStatusService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["live"])


@router.get("/api/twitch/live")
@router.get("/live-status", include_in_schema=False)
async def get_live_status(
    service: LiveStatusService = Depends(get_live_status_service),
) -> JSONResponse:
    """Report whether the configured broadcaster is live.

    Responds 200 with ``isLive: false`` and an ``error`` field when Twitch
    cannot be reached, and 503 when Twitch is not configured at all.
    """
    outcome = await service.check()
    if outcome.is_live:
        logger.debug(f"Stream live: {outcome.stream}")
    return JSONResponse(
        content=outcome.to_payload(),
        status_code=outcome.status_code,
        headers={"Cache-Control": outcome.cache_control},
    )
