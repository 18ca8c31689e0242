"""API Routers package

This package contains all API route handlers.
Routers are organized by feature domain.
"""

from . import live_router

__all__ = [
    "live_router",
]
