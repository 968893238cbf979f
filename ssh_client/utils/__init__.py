"""Utilities for ssh_client."""

from ssh_client.utils.console import ColorfulFormatter, configure_logging
from ssh_client.utils.shell import script_command

__all__ = [
    "ColorfulFormatter",
    "configure_logging",
    "script_command",
]
