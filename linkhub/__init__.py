"""Link hub backend: stats refresh job and live-status web server."""

__version__ = "1.0.0"
