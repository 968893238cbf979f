"""SFTP file upload."""

import logging
import os

import asyncssh

from ssh_client.errors import TransferFailure

logger = logging.getLogger(__name__)


async def put_file(
    conn: asyncssh.SSHClientConnection,
    local_path: str | os.PathLike[str],
    remote_path: str,
) -> None:
    """Upload a local file over an SFTP channel on conn.

    Args:
        conn: Established SSH connection
        local_path: File to send
        remote_path: Destination path on the remote host

    Raises:
        TransferFailure: If the SFTP channel cannot be opened or the transfer fails
    """
    source = os.fspath(local_path)
    logger.debug("Uploading %s → %s", source, remote_path)

    try:
        async with conn.start_sftp_client() as sftp:
            await sftp.put(source, remote_path)
    except (asyncssh.Error, OSError) as e:
        logger.warning("Upload %s → %s failed: %s", source, remote_path, e)
        raise TransferFailure(source, remote_path, e) from e

    logger.debug("Uploaded %s → %s", source, remote_path)
