"""Data models for ssh_client."""

from ssh_client.models.command import ExecOptions, ExecResult
from ssh_client.models.connection import ConnectionState

__all__ = [
    "ConnectionState",
    "ExecOptions",
    "ExecResult",
]
