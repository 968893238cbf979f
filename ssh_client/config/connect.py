"""Connection parameters for a single SSH host."""

from dataclasses import dataclass, field
from typing import Any

from ssh_client.config.settings import Settings


@dataclass
class ConnectConfig:
    """Connection parameters passed through to ``asyncssh.connect``.

    Unset values are left out so asyncssh applies its own defaults,
    including anything found in ``~/.ssh/config``.
    """

    host: str
    port: int = 22
    username: str | None = None
    password: str | None = None
    client_keys: list[str] | None = None
    known_hosts: str | None = None
    verify_host_key: bool = True
    connect_timeout: float | None = None
    options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, host: str, settings: Settings, **overrides: Any) -> "ConnectConfig":
        """Build a config for host using environment defaults.

        Args:
            host: Hostname or address to connect to
            settings: Settings supplying port, user, known_hosts and timeout
            **overrides: Field values that win over settings

        Returns:
            ConnectConfig for the host
        """
        known_hosts = settings.known_hosts
        verify = True
        if known_hosts and known_hosts.lower() == "none":
            known_hosts = None
            verify = False

        values: dict[str, Any] = {
            "port": settings.port,
            "username": settings.username,
            "known_hosts": known_hosts,
            "verify_host_key": verify,
            "connect_timeout": settings.connect_timeout,
        }
        values.update(overrides)
        return cls(host=host, **values)

    @property
    def user_host(self) -> str:
        """``user@host:port`` label used in log messages."""
        user = f"{self.username}@" if self.username else ""
        return f"{user}{self.host}:{self.port}"

    def to_connect_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``asyncssh.connect`` (host excluded)."""
        kwargs: dict[str, Any] = {"port": self.port}
        if self.username is not None:
            kwargs["username"] = self.username
        if self.password is not None:
            kwargs["password"] = self.password
        if self.client_keys is not None:
            kwargs["client_keys"] = self.client_keys
        if not self.verify_host_key:
            kwargs["known_hosts"] = None
        elif self.known_hosts is not None:
            kwargs["known_hosts"] = self.known_hosts
        if self.connect_timeout is not None:
            kwargs["connect_timeout"] = self.connect_timeout
        kwargs.update(self.options)
        return kwargs
