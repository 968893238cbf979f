"""Tests for command models."""

from ssh_client.models import ExecOptions, ExecResult


def test_exec_options_defaults() -> None:
    options = ExecOptions()

    assert options.stdin is None
    assert options.stdin_bytes() is None
    assert not options.has_timeout
    assert options.check is False
    assert options.encoding == "utf-8"


def test_has_timeout() -> None:
    assert ExecOptions(timeout=0.1).has_timeout
    assert not ExecOptions(timeout=0).has_timeout
    assert not ExecOptions(timeout=-1).has_timeout


def test_stdin_bytes_encodes_text() -> None:
    assert ExecOptions(stdin="ü").stdin_bytes() == b"\xc3\xbc"
    assert ExecOptions(stdin="ü", encoding="latin-1").stdin_bytes() == b"\xfc"


def test_stdin_bytes_passes_binary() -> None:
    assert ExecOptions(stdin=bytearray(b"\x00")).stdin_bytes() == b"\x00"


def test_exec_result_ok() -> None:
    assert ExecResult(code=0, stdout="", stderr="").ok
    assert not ExecResult(code=1, stdout="", stderr="").ok


def test_empty_stdin_is_not_awaited() -> None:
    """Empty stdin is still sent as EOF but need not be flushed before exit."""
    options = ExecOptions(stdin="")

    assert not options.has_stdin
    assert options.stdin_bytes() == b""
    assert ExecOptions(stdin="x").has_stdin
    assert not ExecOptions().has_stdin
