"""Concrete implementations of the external tool seams."""

from .qemu_disk import QemuImgTool
from .subprocess_runner import SubprocessRunner
from .virsh import VirshBackend

__all__ = ["QemuImgTool", "SubprocessRunner", "VirshBackend"]
