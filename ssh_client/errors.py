"""Exceptions raised by the SSH client.

Every failure is scoped to a single call and is never retried internally.
"""


class SSHClientError(Exception):
    """Base class for all ssh_client errors."""


class ConnectionFailure(SSHClientError):
    """The SSH connection could not be established."""

    def __init__(self, host: str, original_error: BaseException | None = None):
        """Initialize connection failure.

        Args:
            host: Host the client was configured for
            original_error: Exception raised by the transport, if any
        """
        self.host = host
        self.original_error = original_error
        if original_error is None:
            super().__init__(f"SSH connect to {host} failed")
        else:
            super().__init__(f"SSH connect to {host} failed: {original_error}")


class ClientClosed(ConnectionFailure):
    """The client was closed and cannot be used again."""

    def __str__(self) -> str:
        return f"SSH client for {self.host} is closed"


class CommandError(SSHClientError):
    """Base class for failures of a single command invocation."""

    def __init__(self, command: str, message: str):
        self.command = command
        super().__init__(message)


class ChannelOpenError(CommandError):
    """The session channel for a command could not be opened."""

    def __init__(self, command: str, original_error: BaseException):
        self.original_error = original_error
        super().__init__(command, f"failed to open channel for {command!r}: {original_error}")


class ChannelClosed(CommandError):
    """The channel was lost before the remote process reported an exit."""

    def __init__(self, command: str, original_error: BaseException):
        self.original_error = original_error
        super().__init__(
            command, f"channel for {command!r} closed before exit: {original_error}"
        )


class CommandTimeout(CommandError):
    """The command did not exit before its timeout elapsed."""

    def __init__(self, command: str, timeout: float):
        self.timeout = timeout
        super().__init__(command, f"exec timeout of {timeout:g}s expired")


class _ExitError(CommandError):
    """A failure that carries the remote exit code and accumulated output."""

    def __init__(
        self,
        command: str,
        message: str,
        code: int | None,
        stdout: str,
        stderr: str,
    ):
        self.code = code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            command,
            f'{message}: code: {code}\nstderr: "{stderr}"\nstdout: "{stdout}"',
        )


class PrematureExit(_ExitError):
    """The remote process exited before stdin was completely written."""

    def __init__(self, command: str, code: int | None, stdout: str, stderr: str):
        super().__init__(
            command, "ssh command finished before stdin was written", code, stdout, stderr
        )


class NonZeroExit(_ExitError):
    """The remote process exited with a non-zero code and check was requested."""

    def __init__(self, command: str, code: int, stdout: str, stderr: str):
        super().__init__(command, "command exited with non-zero", code, stdout, stderr)


class TransferFailure(SSHClientError):
    """Uploading a file over SFTP failed."""

    def __init__(self, local_path: str, remote_path: str, original_error: BaseException):
        """Initialize transfer failure.

        Args:
            local_path: Local source path
            remote_path: Remote destination path
            original_error: Exception raised by the SFTP layer
        """
        self.local_path = local_path
        self.remote_path = remote_path
        self.original_error = original_error
        super().__init__(
            f"Transfer {local_path} → {remote_path} failed: {original_error}"
        )
