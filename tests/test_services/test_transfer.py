"""Tests for SFTP upload."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import asyncssh
import pytest

from ssh_client.errors import TransferFailure
from ssh_client.services.transfer import put_file


@pytest.fixture
def mock_sftp() -> MagicMock:
    """SFTP client with an async put."""
    sftp = MagicMock()
    sftp.put = AsyncMock()
    return sftp


@pytest.fixture
def mock_connection(mock_sftp: MagicMock) -> MagicMock:
    """Connection whose start_sftp_client yields mock_sftp."""
    conn = MagicMock()
    # Use MagicMock so start_sftp_client() is not a coroutine
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=mock_sftp)
    context.__aexit__ = AsyncMock(return_value=None)
    conn.start_sftp_client = MagicMock(return_value=context)
    return conn


@pytest.fixture
def local_file(tmp_path: Path) -> Path:
    path = tmp_path / "payload.txt"
    path.write_text("test content\n")
    return path


@pytest.mark.asyncio
async def test_put_file_uploads(
    mock_connection: MagicMock, mock_sftp: MagicMock, local_file: Path
) -> None:
    """File is sent over a fresh SFTP channel."""
    await put_file(mock_connection, local_file, "/tmp/payload.txt")

    mock_connection.start_sftp_client.assert_called_once_with()
    mock_sftp.put.assert_awaited_once_with(str(local_file), "/tmp/payload.txt")


@pytest.mark.asyncio
async def test_put_file_transfer_error(
    mock_connection: MagicMock, mock_sftp: MagicMock, local_file: Path
) -> None:
    """Transfer errors surface as TransferFailure with the cause."""
    cause = asyncssh.SFTPPermissionDenied("Permission denied")
    mock_sftp.put.side_effect = cause

    with pytest.raises(TransferFailure) as exc_info:
        await put_file(mock_connection, local_file, "/root/payload.txt")

    error = exc_info.value
    assert error.original_error is cause
    assert error.remote_path == "/root/payload.txt"
    assert error.local_path == str(local_file)
    assert "Permission denied" in str(error)


@pytest.mark.asyncio
async def test_put_file_missing_local(mock_connection: MagicMock, mock_sftp: MagicMock) -> None:
    """A missing local file is reported the same way."""
    mock_sftp.put.side_effect = FileNotFoundError("no such file")

    with pytest.raises(TransferFailure, match="no such file"):
        await put_file(mock_connection, "/nonexistent", "/tmp/x")


@pytest.mark.asyncio
async def test_put_file_channel_open_error(mock_connection: MagicMock) -> None:
    """Failure to start the SFTP subsystem raises TransferFailure."""
    context = MagicMock()
    context.__aenter__ = AsyncMock(
        side_effect=asyncssh.ChannelOpenError(asyncssh.OPEN_CONNECT_FAILED, "sftp disabled")
    )
    context.__aexit__ = AsyncMock(return_value=None)
    mock_connection.start_sftp_client = MagicMock(return_value=context)

    with pytest.raises(TransferFailure, match="sftp disabled"):
        await put_file(mock_connection, "/etc/hosts", "/tmp/hosts")
