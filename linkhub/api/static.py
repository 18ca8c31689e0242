"""Static site serving with per-type cache headers and SPA fallback"""

import logging
import os

from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

logger = logging.getLogger(__name__)

DEFAULT_CACHE_CONTROL = "public, max-age=3600"

# JSON data changes with every stats refresh, images almost never
CACHE_CONTROL_BY_EXTENSION = {
    ".json": "public, max-age=300",
    ".css": "public, max-age=3600",
    ".js": "public, max-age=3600",
    ".jpg": "public, max-age=86400",
    ".jpeg": "public, max-age=86400",
    ".png": "public, max-age=86400",
    ".gif": "public, max-age=86400",
    ".svg": "public, max-age=86400",
    ".webp": "public, max-age=86400",
}


def cache_control_for(path: str) -> str:
    """Pick the Cache-Control header for a served file."""
    _, ext = os.path.splitext(path)
    return CACHE_CONTROL_BY_EXTENSION.get(ext.lower(), DEFAULT_CACHE_CONTROL)


class SiteStaticFiles(StaticFiles):
    """StaticFiles that sets cache headers and serves index.html for unknown pages.

    Unknown paths under ``api/`` keep their 404 so API typos are not masked.
    """

    def file_response(self, full_path, stat_result, scope: Scope, status_code: int = 200) -> Response:
        response = super().file_response(full_path, stat_result, scope, status_code)
        response.headers["Cache-Control"] = cache_control_for(str(full_path))
        return response

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404 or path.split("/", 1)[0] == "api":
                raise
            return await super().get_response("index.html", scope)
