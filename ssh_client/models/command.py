"""Command execution data models."""

from dataclasses import dataclass


@dataclass
class ExecOptions:
    """Options for a single command invocation."""

    stdin: str | bytes | None = None
    timeout: float | None = None
    check: bool = False
    encoding: str = "utf-8"

    @property
    def has_timeout(self) -> bool:
        """Whether a positive timeout is configured."""
        return self.timeout is not None and self.timeout > 0

    @property
    def has_stdin(self) -> bool:
        """Whether stdin delivery must complete before the process exits.

        Empty stdin counts as absent; the channel input is still closed.
        """
        return bool(self.stdin)

    def stdin_bytes(self) -> bytes | None:
        """Stdin payload encoded for the channel, or None if not given at all."""
        if self.stdin is None:
            return None
        if isinstance(self.stdin, str):
            return self.stdin.encode(self.encoding)
        return bytes(self.stdin)


@dataclass
class ExecResult:
    """Result of a remote command execution."""

    code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        """True if the command exited with code 0."""
        return self.code == 0
