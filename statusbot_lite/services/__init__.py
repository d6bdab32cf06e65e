"""Clients for the third-party APIs the skill calls."""
