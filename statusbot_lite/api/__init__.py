"""aiohttp hosting for the skill endpoint."""
