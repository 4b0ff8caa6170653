"""QEMU disk image tool implementation."""

from pathlib import Path
from typing import List, Type

from ..errors import ConvertError, ExternalToolError, RepairError, ResizeError
from ..interfaces.disk import DiskImageTool
from ..interfaces.process import ProcessResult, ProcessRunner
from ..logging import get_logger

log = get_logger(__name__)


class QemuImgTool(DiskImageTool):
    """Manage VM disk images using qemu-img."""

    def __init__(self, runner: ProcessRunner, qemu_img: str = "qemu-img"):
        self.runner = runner
        self.qemu_img = qemu_img

    def _run(self, args: List[str], error_cls: Type[ExternalToolError]) -> ProcessResult:
        cmd = [self.qemu_img] + args
        result = self.runner.run(cmd)
        if not result.success:
            raise error_cls(cmd, result.returncode, result.output)
        return result

    def resize(self, path: str, delta_gib: int) -> ProcessResult:
        """Resize a disk image by a relative increment."""
        return self._run(["resize", path, f"+{delta_gib}G"], ResizeError)

    def convert(self, source: str, destination: str, target_format: str) -> ProcessResult:
        """Convert a disk image to another format."""
        return self._run(["convert", "-O", target_format, source, destination], ConvertError)

    def check(self, path: str) -> ProcessResult:
        """Check a disk image; exit status 0 means intact."""
        return self.runner.run([self.qemu_img, "check", path])

    def amend(self, path: str) -> ProcessResult:
        """Repair a qcow2 image in place."""
        return self._run(["amend", "-f", "qcow2", path], RepairError)

    def delete_disk(self, path: str) -> None:
        """Delete disk image."""
        Path(path).unlink()
        log.info("disk.deleted", path=path)
