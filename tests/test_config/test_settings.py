"""Tests for environment settings."""

import pytest

from ssh_client.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove SSH_CLIENT_* variables from the test environment."""
    for key in (
        "PORT",
        "USERNAME",
        "KNOWN_HOSTS",
        "CONNECT_TIMEOUT",
        "COMMAND_TIMEOUT",
        "LOG_LEVEL",
        "LOG_COLORS",
    ):
        monkeypatch.delenv(f"SSH_CLIENT_{key}", raising=False)


def test_defaults() -> None:
    settings = Settings.from_env()

    assert settings.port == 22
    assert settings.username is None
    assert settings.known_hosts is None
    assert settings.connect_timeout is None
    assert settings.command_timeout is None
    assert settings.log_level == "INFO"
    assert settings.log_colors is True


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SSH_CLIENT_PORT", "2222")
    monkeypatch.setenv("SSH_CLIENT_USERNAME", "deploy")
    monkeypatch.setenv("SSH_CLIENT_KNOWN_HOSTS", "/etc/ssh/known_hosts")
    monkeypatch.setenv("SSH_CLIENT_CONNECT_TIMEOUT", "7.5")
    monkeypatch.setenv("SSH_CLIENT_COMMAND_TIMEOUT", "60")
    monkeypatch.setenv("SSH_CLIENT_LOG_LEVEL", "debug")
    monkeypatch.setenv("SSH_CLIENT_LOG_COLORS", "off")

    settings = Settings.from_env()

    assert settings.port == 2222
    assert settings.username == "deploy"
    assert settings.known_hosts == "/etc/ssh/known_hosts"
    assert settings.connect_timeout == 7.5
    assert settings.command_timeout == 60.0
    assert settings.log_level == "DEBUG"
    assert settings.log_colors is False


def test_invalid_int_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    """Bad values log a warning and keep the default."""
    monkeypatch.setenv("SSH_CLIENT_PORT", "ssh")

    assert Settings.from_env().port == 22


def test_invalid_float_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SSH_CLIENT_COMMAND_TIMEOUT", "soon")

    assert Settings.from_env().command_timeout is None


@pytest.mark.parametrize("value", ["0", "-5"])
def test_non_positive_timeout_disables(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("SSH_CLIENT_COMMAND_TIMEOUT", value)

    assert Settings.from_env().command_timeout is None
