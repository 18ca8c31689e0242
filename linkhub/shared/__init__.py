"""Shared building blocks for the web server and the refresh job."""
