"""Services layer - Business logic

Services are initialized with their dependencies and accessed through dependency injection.
"""

from .live_status import LiveStatusOutcome, LiveStatusService

__all__ = [
    "LiveStatusOutcome",
    "LiveStatusService",
]
