"""virsh hypervisor backend implementation."""

from typing import List, Optional

from ..errors import ExternalToolError
from ..interfaces.hypervisor import Hypervisor
from ..interfaces.process import ProcessResult, ProcessRunner
from ..logging import get_logger

log = get_logger(__name__)


class VirshBackend(Hypervisor):
    """Drive libvirt through the ``virsh`` command line."""

    name = "virsh"

    def __init__(
        self,
        runner: ProcessRunner,
        virsh: str = "virsh",
        connect_uri: Optional[str] = None,
    ):
        self.runner = runner
        self.virsh = virsh
        self.connect_uri = connect_uri

    def _command(self, *args: str) -> List[str]:
        cmd = [self.virsh]
        if self.connect_uri:
            cmd.extend(["-c", self.connect_uri])
        cmd.extend(args)
        return cmd

    def _run_checked(self, *args: str, capture_output: bool = True) -> ProcessResult:
        cmd = self._command(*args)
        result = self.runner.run(cmd, capture_output=capture_output)
        if not result.success:
            log.warning("virsh.failed", args=list(args), returncode=result.returncode)
            raise ExternalToolError(cmd, result.returncode, result.output)
        return result

    def list_domains_output(self, all_domains: bool = True) -> str:
        args = ["list", "--all"] if all_domains else ["list"]
        return self._run_checked(*args).stdout

    def domain_exists(self, name: str) -> bool:
        result = self.runner.run(self._command("dominfo", name))
        return result.success

    def rename_domain(self, old_name: str, new_name: str) -> None:
        self._run_checked("domrename", old_name, new_name)
        log.info("virsh.domain_renamed", old_name=old_name, new_name=new_name)

    def run_lifecycle(self, verb: str, name: str) -> None:
        self._run_checked(verb, name, capture_output=False)
        log.info("virsh.lifecycle", verb=verb, vm_name=name)

    def block_devices_output(self, name: str) -> str:
        return self._run_checked("domblklist", name, "--details").stdout

    def node_info(self) -> None:
        self._run_checked("nodeinfo", capture_output=False)
