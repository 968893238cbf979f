"""SSH client owning one lazily-established connection.

Connection lifecycle:
- UNSTARTED until the first operation or explicit connect()
- CONNECTING while a single shared connect task runs; every caller that
  arrives during this window awaits the same task
- READY or FAILED once the task finishes; a failed client never retries
- CLOSED after close(); further operations raise ClientClosed
"""

import asyncio
import logging
import os
from dataclasses import fields
from types import TracebackType
from typing import Any

import asyncssh

from ssh_client.config import ConnectConfig, Settings
from ssh_client.errors import ClientClosed, ConnectionFailure
from ssh_client.models import ConnectionState, ExecOptions, ExecResult
from ssh_client.services.executor import execute
from ssh_client.services.transfer import put_file
from ssh_client.utils.shell import script_command

logger = logging.getLogger(__name__)

_CONFIG_FIELDS = {f.name for f in fields(ConnectConfig)} - {"host", "options"}


class SSHClient:
    """Run commands and upload files over a single SSH connection.

    Example:
        async with SSHClient(host="10.0.0.5", username="deploy") as client:
            result = await client.exec("uname -a")
            await client.put_file("build.tar.gz", "/tmp/build.tar.gz")
    """

    def __init__(
        self,
        config: ConnectConfig | None = None,
        *,
        settings: Settings | None = None,
        **connect_kwargs: Any,
    ) -> None:
        """Initialize client. No network I/O happens until first use.

        Args:
            config: Connection parameters. If omitted, built from
                connect_kwargs (``host`` is required) and settings.
            settings: Environment defaults (default: Settings.from_env())
            **connect_kwargs: ConnectConfig fields or extra asyncssh.connect
                options when config is not given

        Raises:
            ValueError: If neither config nor a host is supplied
        """
        self.settings = settings or Settings.from_env()

        if config is None:
            host = connect_kwargs.pop("host", None)
            if not host:
                raise ValueError("SSHClient requires a ConnectConfig or host=...")
            overrides = {k: v for k, v in connect_kwargs.items() if k in _CONFIG_FIELDS}
            options = {k: v for k, v in connect_kwargs.items() if k not in _CONFIG_FIELDS}
            config = ConnectConfig.from_settings(
                host, self.settings, options=options, **overrides
            )
        elif connect_kwargs:
            raise ValueError("Pass either a ConnectConfig or keyword arguments, not both")

        self.config = config
        self._state = ConnectionState.UNSTARTED
        self._connect_task: asyncio.Task[asyncssh.SSHClientConnection] | None = None
        self._conn: asyncssh.SSHClientConnection | None = None

    @property
    def state(self) -> ConnectionState:
        """Current connection lifecycle state."""
        return self._state

    @property
    def is_connected(self) -> bool:
        """Whether the connection is established and not closed."""
        return self._state is ConnectionState.READY

    async def connect(self) -> asyncssh.SSHClientConnection:
        """Establish the connection, or join the attempt already started.

        Only the first call starts a connection attempt. Later calls,
        including concurrent ones, share its outcome, so a failed attempt
        is reported again rather than retried.

        Returns:
            The established asyncssh connection

        Raises:
            ConnectionFailure: If the connection cannot be established
            ClientClosed: If close() was called
        """
        if self._state is ConnectionState.CLOSED:
            raise ClientClosed(self.config.host)

        if self._connect_task is None:
            self._state = ConnectionState.CONNECTING
            logger.info("Opening SSH connection to %s", self.config.user_host)
            self._connect_task = asyncio.create_task(self._open())
        else:
            logger.debug(
                "Joining connection to %s (state=%s)",
                self.config.host,
                self._state.value,
            )

        task = self._connect_task
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if task.cancelled() and self._state is ConnectionState.CLOSED:
                raise ClientClosed(self.config.host) from None
            raise

    async def _open(self) -> asyncssh.SSHClientConnection:
        try:
            conn = await asyncssh.connect(
                self.config.host, **self.config.to_connect_kwargs()
            )
        except (asyncssh.Error, OSError, asyncio.TimeoutError) as e:
            self._state = ConnectionState.FAILED
            logger.error("SSH connect to %s failed: %s", self.config.user_host, e)
            raise ConnectionFailure(self.config.host, e) from e

        self._conn = conn
        self._state = ConnectionState.READY
        logger.info("SSH connection established to %s", self.config.user_host)
        return conn

    async def _connect_if_needed(self) -> asyncssh.SSHClientConnection:
        if self._state is ConnectionState.READY and self._conn is not None:
            return self._conn
        return await self.connect()

    def close(self) -> None:
        """Terminate the connection. Safe to call in any state."""
        if self._connect_task is not None and not self._connect_task.done():
            logger.debug("Cancelling in-flight connect to %s", self.config.host)
            self._connect_task.cancel()
        if self._conn is not None:
            logger.info("Closing SSH connection to %s", self.config.user_host)
            self._conn.close()
        self._state = ConnectionState.CLOSED

    async def wait_closed(self) -> None:
        """Wait for the underlying connection to finish closing."""
        if self._conn is not None:
            await self._conn.wait_closed()

    async def exec(
        self,
        command: str,
        *,
        stdin: str | bytes | None = None,
        timeout: float | None = None,
        check: bool = False,
        encoding: str = "utf-8",
    ) -> ExecResult:
        """Run a shell command on the remote host.

        Args:
            command: Command line passed to the remote shell
            stdin: Data written to the command's stdin, followed by EOF
            timeout: Seconds before the call fails (default:
                settings.command_timeout; None or <= 0 disables)
            check: Raise NonZeroExit instead of returning a non-zero code
            encoding: Decoding for stdout and encoding for str stdin

        Returns:
            ExecResult with exit code, stdout and stderr.
        """
        conn = await self._connect_if_needed()
        if timeout is None:
            timeout = self.settings.command_timeout
        options = ExecOptions(stdin=stdin, timeout=timeout, check=check, encoding=encoding)
        return await execute(conn, command, options)

    async def exec_script(
        self,
        script: str,
        *,
        sudo: bool = False,
        timeout: float | None = None,
        check: bool = False,
        encoding: str = "utf-8",
    ) -> ExecResult:
        """Run a script by piping it to ``bash -s`` (under sudo if requested)."""
        return await self.exec(
            script_command(sudo),
            stdin=script,
            timeout=timeout,
            check=check,
            encoding=encoding,
        )

    async def put_file(self, local_path: str | os.PathLike[str], remote_path: str) -> None:
        """Upload a local file to remote_path over SFTP."""
        conn = await self._connect_if_needed()
        await put_file(conn, local_path, remote_path)

    async def __aenter__(self) -> "SSHClient":
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
        await self.wait_closed()
