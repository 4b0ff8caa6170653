"""Exception hierarchy for KVM Configurator."""

from typing import Dict, List, Optional, Sequence


class KvmConfiguratorError(Exception):
    """Base class for every error raised by this package."""


class ExternalToolNotFound(KvmConfiguratorError):
    """A required executable is not on PATH."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"command {tool!r} not found in PATH")


class ExternalToolError(KvmConfiguratorError):
    """An external command exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, output: str = "", message: Optional[str] = None):
        self.command: List[str] = list(command)
        self.returncode = returncode
        self.output = output or ""
        if message is None:
            message = f"{' '.join(self.command)} failed (exit {returncode})"
        if self.output.strip():
            message = f"{message}: {self.output.strip()}"
        super().__init__(message)


class ResizeError(ExternalToolError):
    pass


class ConvertError(ExternalToolError):
    pass


class RepairError(ExternalToolError):
    # output of the check that triggered the repair
    check_output = ""


class DomainNotFoundError(KvmConfiguratorError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"VM {name!r} not found")


class NoDiskFoundError(KvmConfiguratorError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No disk found for VM {name!r}")


class InvalidInputError(KvmConfiguratorError, ValueError):
    """Operator input was rejected before anything was executed."""


class ConfigError(KvmConfiguratorError, ValueError):
    pass


class PartialFailure(KvmConfiguratorError):
    """
    Some independent steps of an operation failed after it made progress.

    ``failures`` maps the failed item (usually a file path) to the error text.
    """

    def __init__(self, message: str, failures: Dict[str, str], report=None):
        self.failures = dict(failures)
        self.report = report
        details = "; ".join(f"{item} ({error})" for item, error in self.failures.items())
        super().__init__(f"{message}: {details}" if details else message)
