"""Interface for disk image tooling."""

from abc import ABC, abstractmethod

from .process import ProcessResult


class DiskImageTool(ABC):
    """Abstract interface for disk image operations."""

    @abstractmethod
    def resize(self, path: str, delta_gib: int) -> ProcessResult:
        """Grow an image by ``delta_gib`` GiB."""
        pass

    @abstractmethod
    def convert(self, source: str, destination: str, target_format: str) -> ProcessResult:
        """Write a copy of ``source`` in ``target_format`` to ``destination``."""
        pass

    @abstractmethod
    def check(self, path: str) -> ProcessResult:
        """Non-destructive consistency check; a failed check is not an exception."""
        pass

    @abstractmethod
    def amend(self, path: str) -> ProcessResult:
        """Destructive in-place repair."""
        pass

    @abstractmethod
    def delete_disk(self, path: str) -> None:
        """Delete an image file."""
        pass
