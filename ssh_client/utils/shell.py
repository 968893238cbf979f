"""Shell command helpers."""

SCRIPT_SHELL = "bash -s"


def script_command(sudo: bool = False) -> str:
    """Build the command that runs a script read from stdin.

    Args:
        sudo: Prefix the shell with sudo

    Returns:
        ``bash -s`` or ``sudo bash -s``
    """
    return f"sudo {SCRIPT_SHELL}" if sudo else SCRIPT_SHELL
