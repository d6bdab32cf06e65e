"""Configuration management for the statusbot_lite skill."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_SERVER_BIND = "0.0.0.0"  # nosec B104 - default bind for the skill endpoint
DEFAULT_SERVER_PORT = 8080


def parse_env_file(path: Path) -> dict[str, str]:
    """Parse a .env file and return key-value pairs.

    Args:
        path: Path to .env file

    Returns:
        Dictionary of key-value pairs from the .env file.
        Empty dict if file doesn't exist or cannot be read.

    Note:
        - Skips empty lines and comments (lines starting with #)
        - Strips quotes (both single and double) from values
        - Handles KEY=VALUE format with optional whitespace
    """
    if not path.exists():
        return {}

    result: dict[str, str] = {}

    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        logger.debug("Failed to read .env file (continuing): %s", str(path), exc_info=True)
        return {}

    for raw_line in content.splitlines():
        line = raw_line.strip()

        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, val = line.split("=", 1)
        key = key.strip()
        val = val.strip().strip('"').strip("'")

        if key:
            result[key] = val

    return result


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


class ConfigManager:
    """Manages skill configuration from environment variables and .env files."""

    def __init__(self, env_file_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            env_file_path: Optional path to .env file (defaults to .env in current directory)
        """
        self.env_file_path = env_file_path or Path.cwd() / ".env"

    def load_env_file(self) -> list[str]:
        """Load .env file and set environment variables.

        Only sets variables that are not already in the environment.

        Returns:
            List of environment variable keys that were loaded from .env file
        """
        if not self.env_file_path.exists():
            logger.debug("No .env file found at %s", self.env_file_path)
            return []

        parsed = parse_env_file(self.env_file_path)

        set_keys = []
        for key, val in parsed.items():
            if key not in os.environ:
                os.environ[key] = val
                set_keys.append(key)

        if set_keys:
            logger.debug("Loaded .env defaults for keys: %s", ", ".join(set_keys))

        return set_keys

    def build_config_from_env(self) -> dict[str, Any]:
        """Build configuration dictionary from environment variables.

        Recognizes:
        - STATUSBOT_ALEXA_APP_ID or ALEXA_APP_ID -> 'alexa_app_id'
        - STATUSBOT_MAPS_API_KEY or MAPS_API_KEY -> 'maps_api_key'
        - STATUSBOT_WEB_HOST -> 'server_bind'
        - STATUSBOT_WEB_PORT -> 'server_port' (int)
        - STATUSBOT_REQUEST_TIMEOUT -> 'request_timeout' (float, seconds)
        - STATUSBOT_LOG_LEVEL -> 'log_level'

        Returns:
            Configuration dictionary
        """
        cfg: dict[str, Any] = {}

        app_id = _first_env("STATUSBOT_ALEXA_APP_ID", "ALEXA_APP_ID")
        if app_id:
            cfg["alexa_app_id"] = app_id

        maps_key = _first_env("STATUSBOT_MAPS_API_KEY", "MAPS_API_KEY")
        if maps_key:
            cfg["maps_api_key"] = maps_key
        else:
            logger.warning("No Maps API key configured; snooze requests will fail to geocode")

        host = os.environ.get("STATUSBOT_WEB_HOST")
        if host:
            cfg["server_bind"] = host

        port = os.environ.get("STATUSBOT_WEB_PORT")
        if port:
            try:
                cfg["server_port"] = int(port)
            except ValueError:
                logger.warning("Invalid STATUSBOT_WEB_PORT=%r; ignoring", port)

        timeout = os.environ.get("STATUSBOT_REQUEST_TIMEOUT")
        if timeout:
            try:
                cfg["request_timeout"] = float(timeout)
            except ValueError:
                logger.warning("Invalid STATUSBOT_REQUEST_TIMEOUT=%r; ignoring", timeout)

        log_level = os.environ.get("STATUSBOT_LOG_LEVEL")
        if log_level:
            cfg["log_level"] = log_level

        return cfg

    def load_full_config(self) -> dict[str, Any]:
        """Load .env file and build configuration from environment.

        Returns:
            Configuration dictionary
        """
        self.load_env_file()
        return self.build_config_from_env()


def get_config_value(config: Any, key: str, default: Any = None) -> Any:
    """Get configuration value supporting both dict and dataclass-like objects.

    Args:
        config: Configuration object (dict or object with attributes)
        key: Configuration key to retrieve
        default: Default value if key not found

    Returns:
        Configuration value or default
    """
    if isinstance(config, dict):
        return config.get(key, default)
    return getattr(config, key, default)


@dataclass(frozen=True)
class SkillConfig:
    """Typed view of the settings the skill dispatcher needs."""

    alexa_app_id: Optional[str] = None
    maps_api_key: str = ""
    request_timeout: Optional[float] = None

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> SkillConfig:
        timeout = config.get("request_timeout")
        return cls(
            alexa_app_id=config.get("alexa_app_id") or None,
            maps_api_key=config.get("maps_api_key") or "",
            request_timeout=float(timeout) if timeout is not None else None,
        )

    @classmethod
    def from_env(cls, env_file_path: Path | None = None) -> SkillConfig:
        return cls.from_mapping(ConfigManager(env_file_path).load_full_config())
