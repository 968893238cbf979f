"""Command execution over an SSH session channel.

One CommandInvocation per execute() call. The session callbacks asyncssh
delivers and the timeout timer all feed the invocation:

- data_received: stdout / stderr chunks appended to the buffers
- resume_writing: channel send buffer drained, stdin delivered
- exit_status_received / exit_signal_received: remote process exited
- connection_lost: channel closed, every buffered chunk delivered
- timer: timeout elapsed (armed before the channel is opened)

asyncssh reports the exit status as soon as it arrives but may still hold
output in the channel's receive buffer, so an exit only records the code
and the stdin state; the outcome is produced once the channel closes.

Every path settles through _settle(), which flips PENDING to SETTLED once.
All callbacks run on the event loop thread, so the check needs no lock.
"""

import asyncio
import codecs
import logging
import time
from enum import Enum
from typing import Any

import asyncssh

from ssh_client.errors import (
    ChannelClosed,
    ChannelOpenError,
    CommandError,
    CommandTimeout,
    NonZeroExit,
    PrematureExit,
)
from ssh_client.models import ExecOptions, ExecResult

logger = logging.getLogger(__name__)


class InvocationState(Enum):
    """Settle state of a command invocation."""

    PENDING = "pending"
    SETTLED = "settled"


class CommandInvocation:
    """State of one in-flight command: buffers, timer and settle future."""

    def __init__(
        self,
        command: str,
        options: ExecOptions,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize invocation.

        Args:
            command: Shell command passed to the remote shell
            options: stdin, timeout, check and encoding for this call
            loop: Event loop for the timer and future (default: running loop)
        """
        self.command = command
        self.options = options
        self.state = InvocationState.PENDING
        self.stdin_flushed = not options.has_stdin

        self.exited = False
        self.exit_code: int | None = None
        self._stdin_flushed_at_exit = False

        self._loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future[ExecResult] = self._loop.create_future()
        self._timer: asyncio.TimerHandle | None = None
        self._opening: asyncio.Future[Any] | None = None
        self._chan: asyncssh.SSHClientChannel | None = None
        self._stdin_written = False
        self._started_at = time.monotonic()

        self._stdout_parts: list[str] = []
        self._stderr_parts: list[str] = []
        self._stdout_decoder = codecs.getincrementaldecoder(options.encoding)(
            errors="replace"
        )
        self._stderr_decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def stdout(self) -> str:
        """Standard output accumulated so far."""
        return "".join(self._stdout_parts)

    @property
    def stderr(self) -> str:
        """Standard error accumulated so far."""
        return "".join(self._stderr_parts)

    @property
    def settled(self) -> bool:
        """Whether a result or error has been produced."""
        return self.state is InvocationState.SETTLED

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since the invocation was created."""
        return (time.monotonic() - self._started_at) * 1000

    def arm_timer(self) -> None:
        """Start the timeout clock, if one is configured."""
        if self.options.has_timeout and self._timer is None and not self.settled:
            self._timer = self._loop.call_later(self.options.timeout, self.on_timeout)

    async def open(self, conn: asyncssh.SSHClientConnection) -> asyncssh.SSHClientChannel:
        """Open the session channel, giving up early if the timer fires.

        Raises:
            CommandTimeout: If the timeout elapses while the channel opens
            ChannelOpenError: If asyncssh refuses the channel
        """
        self._opening = asyncio.ensure_future(
            conn.create_session(lambda: CommandSession(self), self.command, encoding=None)
        )
        try:
            chan, _ = await self._opening
        except asyncio.CancelledError:
            if self.settled and self._opening.cancelled():
                return await self.wait()  # type: ignore[return-value]
            raise
        except (asyncssh.Error, OSError) as e:
            logger.debug("Opening channel for %r failed: %s", self.command, e)
            raise ChannelOpenError(self.command, e) from e
        finally:
            self._opening = None
        return chan

    def start(self, chan: asyncssh.SSHClientChannel) -> None:
        """Send stdin once the channel is open."""
        self._chan = chan
        if self.settled:
            return

        payload = self.options.stdin_bytes()
        if payload is None:
            return

        # Zero limits make resume_writing fire exactly when the buffer drains
        chan.set_write_buffer_limits(high=0, low=0)
        try:
            if payload:
                chan.write(payload)
            chan.write_eof()
        except BrokenPipeError:
            logger.debug("Channel closed before stdin was written for %r", self.command)
            return
        self._stdin_written = True
        self.check_stdin_flushed()

    def check_stdin_flushed(self) -> None:
        """Mark stdin delivered once the channel has nothing left to send."""
        if self.stdin_flushed or not self._stdin_written or self._chan is None:
            return
        if self._chan.get_write_buffer_size() == 0:
            self.stdin_flushed = True
            logger.debug("stdin flushed for %r", self.command)

    def on_stdout(self, data: bytes) -> None:
        self._stdout_parts.append(self._stdout_decoder.decode(data))

    def on_stderr(self, data: bytes) -> None:
        self._stderr_parts.append(self._stderr_decoder.decode(data))

    def on_timeout(self) -> None:
        """Timer callback: fail the invocation if it is still pending."""
        self._timer = None
        if not self._settle(error=CommandTimeout(self.command, self.options.timeout or 0)):
            return
        logger.debug("exec timeout of %ss expired for %r", self.options.timeout, self.command)
        if self._opening is not None and not self._opening.done():
            self._opening.cancel()

    def on_exit(self, code: int | None) -> None:
        """Remote process exited with code (None when no status was reported).

        Cancels the timer and records the code along with whether stdin had
        been delivered by now. The outcome waits for the channel to close so
        buffered output is not lost.
        """
        self._cancel_timer()
        if self.settled:
            logger.debug("Ignoring exit of %r after settle (code=%s)", self.command, code)
            return
        if self.exited:
            return
        self.exited = True
        self.exit_code = code
        self._stdin_flushed_at_exit = self.stdin_flushed

    def on_connection_lost(self, exc: Exception | None) -> None:
        """Channel closed: produce the outcome from the recorded exit."""
        self._cancel_timer()
        if self.settled:
            return
        if not self.exited:
            if exc is not None:
                self._settle(error=ChannelClosed(self.command, exc))
                return
            self.on_exit(None)
        self._complete()

    def _complete(self) -> None:
        self._stdout_parts.append(self._stdout_decoder.decode(b"", final=True))
        self._stderr_parts.append(self._stderr_decoder.decode(b"", final=True))
        code, stdout, stderr = self.exit_code, self.stdout, self.stderr

        if not self._stdin_flushed_at_exit:
            error: CommandError = PrematureExit(self.command, code, stdout, stderr)
            logger.debug("%s", error)
            self._settle(error=error)
        elif self.options.check and code:
            logger.debug("ssh command %r exited with code %d", self.command, code)
            self._settle(error=NonZeroExit(self.command, code, stdout, stderr))
        else:
            logger.debug(
                "ssh command %r finished: code=%s in %.1fms",
                self.command,
                code,
                self.elapsed_ms,
            )
            self._settle(result=ExecResult(code=code or 0, stdout=stdout, stderr=stderr))

    async def wait(self) -> ExecResult:
        """Wait for the invocation to settle."""
        return await self._future

    def finalize(self) -> None:
        """Release the timer and the channel. Safe to call more than once."""
        self._cancel_timer()
        self.state = InvocationState.SETTLED
        if self._chan is not None:
            self._chan.close()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _settle(
        self,
        result: ExecResult | None = None,
        error: CommandError | None = None,
    ) -> bool:
        """Produce the outcome once; later calls are ignored."""
        if self.settled or self._future.done():
            return False
        self.state = InvocationState.SETTLED
        if error is not None:
            self._future.set_exception(error)
        else:
            self._future.set_result(result)  # type: ignore[arg-type]
        return True


class CommandSession(asyncssh.SSHClientSession):
    """asyncssh session that forwards channel events to an invocation."""

    def __init__(self, invocation: CommandInvocation) -> None:
        self._invocation = invocation

    def data_received(self, data: bytes, datatype: int | None) -> None:
        if datatype == asyncssh.EXTENDED_DATA_STDERR:
            self._invocation.on_stderr(data)
        else:
            self._invocation.on_stdout(data)

    def resume_writing(self) -> None:
        self._invocation.check_stdin_flushed()

    def exit_status_received(self, status: int) -> None:
        self._invocation.on_exit(status)

    def exit_signal_received(
        self, signal: str, core_dumped: bool, msg: str, lang: str
    ) -> None:
        logger.debug(
            "ssh command %r killed by signal %s (core_dumped=%s)",
            self._invocation.command,
            signal,
            core_dumped,
        )
        self._invocation.on_exit(None)

    def connection_lost(self, exc: Exception | None) -> None:
        self._invocation.on_connection_lost(exc)


async def execute(
    conn: asyncssh.SSHClientConnection,
    command: str,
    options: ExecOptions | None = None,
) -> ExecResult:
    """Run a command on an open connection.

    The timeout covers opening the channel as well as running the command.

    Args:
        conn: Established SSH connection
        command: Shell command to run
        options: stdin, timeout, check and encoding (defaults if omitted)

    Returns:
        ExecResult with exit code, stdout and stderr.

    Raises:
        ChannelOpenError: If the session channel cannot be opened
        CommandTimeout: If the timeout elapses before the process exits
        PrematureExit: If the process exits before stdin was delivered
        NonZeroExit: If check is set and the exit code is non-zero
        ChannelClosed: If the channel is lost before an exit is reported
    """
    options = options or ExecOptions()
    invocation = CommandInvocation(command, options)
    logger.debug(
        "Executing %r (timeout=%s, stdin=%s, check=%s)",
        command,
        options.timeout,
        options.has_stdin,
        options.check,
    )

    invocation.arm_timer()
    try:
        chan = await invocation.open(conn)
        invocation.start(chan)
        return await invocation.wait()
    finally:
        invocation.finalize()
