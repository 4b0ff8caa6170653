#!/usr/bin/env python3
"""
Undefine a domain and optionally delete its disk images.

The undefine is not rolled back when the operator declines disk deletion or
when individual deletions fail.
"""

from pathlib import Path
from typing import Callable, Dict, Union

from kvmconfigurator.disks import resolve_disk_paths
from kvmconfigurator.errors import NoDiskFoundError, PartialFailure
from kvmconfigurator.interfaces.disk import DiskImageTool
from kvmconfigurator.interfaces.hypervisor import Hypervisor
from kvmconfigurator.logging import get_logger, log_operation
from kvmconfigurator.models import Action, DeleteOutcome, OperationReport, StepPolicy

log = get_logger(__name__)

Confirm = Callable[[str], bool]


class DeleteCoordinator:
    """Undefine, locate disks, confirm, delete each disk independently."""

    def __init__(self, hypervisor: Hypervisor, image_tool: DiskImageTool, xml_dir: Union[str, Path]):
        self.hypervisor = hypervisor
        self.image_tool = image_tool
        self.xml_dir = Path(xml_dir)

    def delete_with_disks(self, domain_name: str, confirm: Confirm) -> OperationReport:
        """
        Undefine ``domain_name`` and delete its disks after confirmation.

        Raises ExternalToolError if the undefine fails (no disk is touched),
        and PartialFailure listing every disk that could not be deleted.
        """
        report = OperationReport(operation="vm_undefine", domain=domain_name)

        with log_operation(log, "vm_undefine", vm_name=domain_name) as oplog:
            self.hypervisor.run_lifecycle(Action.UNDEFINE.value, domain_name)
            report.add_step("undefine", True, f"VM {domain_name} became undefined")

            try:
                disk_paths = resolve_disk_paths(self.hypervisor, self.xml_dir, domain_name)
            except NoDiskFoundError:
                disk_paths = []

            if not disk_paths:
                report.outcome = DeleteOutcome.NOTHING_TO_DELETE
                report.add_step("locate_disks", True, "No hard drives found to delete")
                return report
            report.add_step("locate_disks", True, f"{len(disk_paths)} disk file(s) found")

            if not confirm(f"Should {len(disk_paths)} disk files really be deleted?"):
                oplog.info("vm_undefine.disk_deletion_skipped", disks=disk_paths)
                report.outcome = DeleteOutcome.SKIPPED
                report.add_step("delete_disks", True, "Disk deletion aborted")
                return report

            failures: Dict[str, str] = {}
            for path in disk_paths:
                try:
                    self.image_tool.delete_disk(path)
                except OSError as e:
                    oplog.warning("vm_undefine.disk_delete_failed", path=path, error=str(e))
                    failures[path] = str(e)
                    report.add_step(f"delete:{path}", False, str(e), policy=StepPolicy.BEST_EFFORT, error=e)
                else:
                    report.add_step(f"delete:{path}", True, f"{path} deleted", StepPolicy.BEST_EFFORT)

            report.outcome = DeleteOutcome.DELETED
            if failures:
                raise PartialFailure("Some files could not be deleted", failures, report=report)

        return report
