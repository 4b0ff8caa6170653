"""Abstract seams around the external tools."""

from .disk import DiskImageTool
from .hypervisor import Hypervisor
from .process import ProcessResult, ProcessRunner

__all__ = ["DiskImageTool", "Hypervisor", "ProcessResult", "ProcessRunner"]
