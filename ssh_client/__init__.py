"""Run commands and upload files over a single asyncssh connection."""

from ssh_client.client import SSHClient
from ssh_client.config import ConnectConfig, Settings
from ssh_client.errors import (
    ChannelClosed,
    ChannelOpenError,
    ClientClosed,
    CommandError,
    CommandTimeout,
    ConnectionFailure,
    NonZeroExit,
    PrematureExit,
    SSHClientError,
    TransferFailure,
)
from ssh_client.models import ConnectionState, ExecOptions, ExecResult
from ssh_client.utils import configure_logging

__all__ = [
    "ChannelClosed",
    "ChannelOpenError",
    "ClientClosed",
    "CommandError",
    "CommandTimeout",
    "ConnectConfig",
    "ConnectionFailure",
    "ConnectionState",
    "ExecOptions",
    "ExecResult",
    "NonZeroExit",
    "PrematureExit",
    "SSHClient",
    "SSHClientError",
    "Settings",
    "TransferFailure",
    "configure_logging",
]
