"""Tests for the public package layout."""

import pytest


class TestPublicApi:
    """Names importable from the top-level package."""

    @pytest.mark.parametrize(
        "name",
        [
            "SSHClient",
            "ConnectConfig",
            "Settings",
            "ExecResult",
            "ExecOptions",
            "ConnectionState",
            "CommandTimeout",
            "PrematureExit",
            "NonZeroExit",
            "TransferFailure",
            "ConnectionFailure",
            "configure_logging",
        ],
    )
    def test_exported(self, name: str) -> None:
        import ssh_client

        assert name in ssh_client.__all__
        assert getattr(ssh_client, name) is not None

    def test_services_exports(self) -> None:
        from ssh_client.services import execute, put_file

        assert callable(execute)
        assert callable(put_file)

    def test_script_command(self) -> None:
        from ssh_client.utils import script_command

        assert script_command() == "bash -s"
        assert script_command(sudo=True) == "sudo bash -s"
