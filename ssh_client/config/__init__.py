"""Configuration module for ssh_client.

- ConnectConfig: Parameters for one SSH host
- Settings: Environment variable configuration
"""

from ssh_client.config.connect import ConnectConfig
from ssh_client.config.settings import Settings

__all__ = ["ConnectConfig", "Settings"]
