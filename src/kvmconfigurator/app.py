"""Wire the default collaborators together from a configuration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console

from kvmconfigurator.backends.qemu_disk import QemuImgTool
from kvmconfigurator.backends.subprocess_runner import SubprocessRunner
from kvmconfigurator.backends.virsh import VirshBackend
from kvmconfigurator.config import AppConfig
from kvmconfigurator.delete import DeleteCoordinator
from kvmconfigurator.diskops import DiskOperations
from kvmconfigurator.interfaces.disk import DiskImageTool
from kvmconfigurator.interfaces.hypervisor import Hypervisor
from kvmconfigurator.interfaces.process import ProcessRunner
from kvmconfigurator.rename import RenameCoordinator


@dataclass
class Toolbox:
    """Everything the menu and the subcommands operate through."""

    hypervisor: Hypervisor
    image_tool: DiskImageTool
    xml_dir: Path
    console: Optional[Console] = None

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        runner: Optional[ProcessRunner] = None,
        console: Optional[Console] = None,
    ) -> "Toolbox":
        runner = runner or SubprocessRunner()
        return cls(
            hypervisor=VirshBackend(runner, virsh=config.tools.virsh, connect_uri=config.tools.connect_uri),
            image_tool=QemuImgTool(runner, qemu_img=config.tools.qemu_img),
            xml_dir=config.xml_dir,
            console=console,
        )

    @property
    def disk_operations(self) -> DiskOperations:
        return DiskOperations(self.hypervisor, self.image_tool, self.xml_dir, console=self.console)

    @property
    def renamer(self) -> RenameCoordinator:
        return RenameCoordinator(self.hypervisor, self.xml_dir)

    @property
    def deleter(self) -> DeleteCoordinator:
        return DeleteCoordinator(self.hypervisor, self.image_tool, self.xml_dir)
