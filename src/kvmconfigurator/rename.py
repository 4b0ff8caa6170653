#!/usr/bin/env python3
"""
Rename a domain together with its XML definition and system disk.

Only the registry rename is a hard stop. Once the hypervisor knows the new
name the operation counts as done; the file renames that follow are best
effort and their failures come back as warnings on the report.
"""

import os
from pathlib import Path
from typing import Callable, Optional, Union

from kvmconfigurator.disks import live_disk_paths
from kvmconfigurator.errors import DomainNotFoundError, InvalidInputError, KvmConfiguratorError
from kvmconfigurator.interfaces.hypervisor import Hypervisor
from kvmconfigurator.logging import get_logger, log_operation
from kvmconfigurator.models import OperationReport, StepPolicy
from kvmconfigurator.paths import renamed_disk_path, xml_definition_path

log = get_logger(__name__)

NamePrompt = Callable[[str], Optional[str]]


class RenameCoordinator:
    """Rename registry entry, XML file and system disk, in that order."""

    def __init__(self, hypervisor: Hypervisor, xml_dir: Union[str, Path]):
        self.hypervisor = hypervisor
        self.xml_dir = Path(xml_dir)

    def rename(self, old_name: str, ask_new_name: NamePrompt) -> OperationReport:
        """
        Rename ``old_name`` to the name returned by ``ask_new_name``.

        Raises DomainNotFoundError, InvalidInputError or ExternalToolError
        before anything has changed; never raises after the registry rename.
        """
        report = OperationReport(operation="vm_rename", domain=old_name)

        with log_operation(log, "vm_rename", vm_name=old_name) as oplog:
            if not self.hypervisor.domain_exists(old_name):
                raise DomainNotFoundError(old_name)
            report.add_step("exists", True)

            new_name = (ask_new_name(old_name) or "").strip()
            if not new_name:
                raise InvalidInputError("New name cannot be empty")
            if new_name == old_name:
                raise InvalidInputError("New name is identical to the old one, nothing to do")
            oplog = oplog.bind(new_name=new_name)

            self.hypervisor.rename_domain(old_name, new_name)
            report.domain = new_name
            report.add_step("rename_domain", True, f"VM {old_name} renamed to {new_name}")

            self._rename_xml(report, old_name, new_name, oplog)
            self._rename_system_disk(report, new_name, oplog)

        return report

    def _rename_xml(self, report: OperationReport, old_name: str, new_name: str, oplog) -> None:
        old_xml = xml_definition_path(self.xml_dir, old_name)
        new_xml = xml_definition_path(self.xml_dir, new_name)
        try:
            os.rename(old_xml, new_xml)
        except FileNotFoundError as e:
            oplog.warning("vm_rename.xml_missing", xml_file=str(old_xml))
            report.add_step(
                "rename_xml", False, f"XML file not found: {old_xml}", policy=StepPolicy.BEST_EFFORT, error=e
            )
        except OSError as e:
            oplog.warning("vm_rename.xml_failed", xml_file=str(old_xml), error=str(e))
            report.add_step(
                "rename_xml",
                False,
                f"XML file {old_xml} could not be renamed: {e}",
                policy=StepPolicy.BEST_EFFORT,
                error=e,
            )
        else:
            report.add_step("rename_xml", True, f"XML file renamed: {old_xml} -> {new_xml}", StepPolicy.BEST_EFFORT)

    def _rename_system_disk(self, report: OperationReport, new_name: str, oplog) -> None:
        try:
            old_disk = live_disk_paths(self.hypervisor, new_name)[0]
        except KvmConfiguratorError as e:
            oplog.warning("vm_rename.disk_lookup_failed", error=str(e))
            report.add_step(
                "rename_disk", False, f"Disk not renamed: {e}", policy=StepPolicy.BEST_EFFORT, error=e
            )
            return

        new_disk = renamed_disk_path(old_disk, new_name)
        if new_disk == old_disk:
            report.add_step("rename_disk", True, f"Disk already named {new_disk}", StepPolicy.BEST_EFFORT)
            return

        try:
            os.rename(old_disk, new_disk)
        except OSError as e:
            oplog.warning("vm_rename.disk_failed", disk=old_disk, error=str(e))
            report.add_step(
                "rename_disk",
                False,
                f"Disk file {old_disk} could not be renamed: {e}",
                policy=StepPolicy.BEST_EFFORT,
                error=e,
            )
        else:
            report.add_step("rename_disk", True, f"Disk file renamed: {old_disk} -> {new_disk}", StepPolicy.BEST_EFFORT)
