"""Shared infrastructure: configuration, HTTP client, time."""
