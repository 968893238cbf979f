"""Client settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

ENV_PREFIX = "SSH_CLIENT_"


@dataclass
class Settings:
    """Client settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Connection defaults
    port: int = field(default=22)
    username: str | None = field(default=None)
    known_hosts: str | None = field(default=None)
    connect_timeout: float | None = field(default=None)

    # Command defaults
    command_timeout: float | None = field(default=None)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from SSH_CLIENT_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            port=cls._get_int("PORT", 22),
            username=os.getenv(ENV_PREFIX + "USERNAME") or None,
            known_hosts=os.getenv(ENV_PREFIX + "KNOWN_HOSTS") or None,
            connect_timeout=cls._get_float("CONNECT_TIMEOUT", None),
            command_timeout=cls._get_float("COMMAND_TIMEOUT", None),
            log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("LOG_COLORS", True),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Variable name without the SSH_CLIENT_ prefix
            default: Default value if not set

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(ENV_PREFIX + key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning(
                "Invalid int for %s%s: %s, using default %d", ENV_PREFIX, key, value, default
            )
            return default

    @staticmethod
    def _get_float(key: str, default: float | None) -> float | None:
        """Get a positive float from environment.

        Zero or negative values disable the setting.
        """
        value = os.getenv(ENV_PREFIX + key)
        if value is None or not value.strip():
            return default

        try:
            number = float(value)
        except ValueError:
            logger.warning(
                "Invalid number for %s%s: %s, using default %s",
                ENV_PREFIX,
                key,
                value,
                default,
            )
            return default
        return number if number > 0 else None

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Variable name without the SSH_CLIENT_ prefix
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(ENV_PREFIX + key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")
