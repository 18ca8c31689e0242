"""Error taxonomy for upstream platform calls."""


class LinkHubError(Exception):
    """Base class for all link hub errors."""


class ConfigMissing(LinkHubError):
    """Credentials or identifiers for a platform are not configured."""


class AuthError(LinkHubError):
    """Client-credentials token exchange failed, was rejected or timed out."""


class UpstreamError(LinkHubError):
    """A data resource answered with a non-2xx status or malformed body."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamTimeout(UpstreamError):
    """A data resource call exceeded its timeout."""

    def __init__(self, message: str = "Request timeout"):
        super().__init__(message)
