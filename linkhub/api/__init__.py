"""Link hub web server: static site, health check and live status."""
