"""Services for ssh_client."""

from ssh_client.services.executor import (
    CommandInvocation,
    CommandSession,
    InvocationState,
    execute,
)
from ssh_client.services.transfer import put_file

__all__ = [
    "CommandInvocation",
    "CommandSession",
    "InvocationState",
    "execute",
    "put_file",
]
