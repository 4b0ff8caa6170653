"""Check that the external tools are installed before the menu starts."""

import shutil

from kvmconfigurator.errors import ExternalToolNotFound


def require_command(name: str) -> str:
    """Return the resolved path of ``name``; raises ExternalToolNotFound."""
    resolved = shutil.which(name)
    if resolved is None:
        raise ExternalToolNotFound(name)
    return resolved


def ensure_all(*commands: str) -> None:
    """Check commands in order, stopping at the first missing one."""
    for command in commands:
        require_command(command)
