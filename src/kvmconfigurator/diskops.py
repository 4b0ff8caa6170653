#!/usr/bin/env python3
"""
Disk operations on a domain's system disk: resize, convert and repair.

All three act on the path the hypervisor reports live, not on the saved XML,
since they change the image the running definition points at.
"""

import re
from pathlib import Path
from typing import Optional, Union

from rich.console import Console

from kvmconfigurator.errors import InvalidInputError, RepairError
from kvmconfigurator.interfaces.disk import DiskImageTool
from kvmconfigurator.interfaces.hypervisor import Hypervisor
from kvmconfigurator.disks import live_disk_paths
from kvmconfigurator.logging import get_logger, log_operation
from kvmconfigurator.models import DISK_FORMATS, OperationReport, StepPolicy
from kvmconfigurator.paths import converted_disk_path, xml_definition_path
from kvmconfigurator.progress import working

log = get_logger(__name__)

XML_DECLARATION_ENCODING = re.compile(rb"""^\s*<\?xml[^>]*\bencoding\s*=\s*["']([A-Za-z][A-Za-z0-9._-]*)["']""")


def declared_encoding(data: bytes) -> str:
    """Encoding named in the XML declaration of ``data``, default UTF-8."""
    match = XML_DECLARATION_ENCODING.match(data)
    return match.group(1).decode("ascii") if match else "utf-8"


def replace_disk_path_in_xml(xml_file: Union[str, Path], old_path: str, new_path: str) -> int:
    """
    Point quoted attribute values equal to ``old_path`` at ``new_path``.

    The file is treated as text so its formatting survives; only whole quoted
    values are replaced, never substrings of longer values. It is decoded and
    written back in the encoding its XML declaration names (UTF-8 if none).
    Returns the number of replacements.

    Raises OSError if the file cannot be read or written, UnicodeError if it
    does not match its encoding and LookupError for an unknown encoding.
    """
    xml_file = Path(xml_file)
    data = xml_file.read_bytes()
    encoding = declared_encoding(data)
    text = data.decode(encoding)
    pattern = re.compile(r"""(["'])%s\1""" % re.escape(old_path))
    updated, count = pattern.subn(lambda m: f"{m.group(1)}{new_path}{m.group(1)}", text)
    if count:
        xml_file.write_bytes(updated.encode(encoding))
    return count


class DiskOperations:
    """Resize, convert and repair the system disk of a domain."""

    def __init__(
        self,
        hypervisor: Hypervisor,
        image_tool: DiskImageTool,
        xml_dir: Union[str, Path],
        console: Optional[Console] = None,
    ):
        self.hypervisor = hypervisor
        self.image_tool = image_tool
        self.xml_dir = Path(xml_dir)
        self.console = console

    def system_disk(self, domain_name: str) -> str:
        return live_disk_paths(self.hypervisor, domain_name)[0]

    def resize(self, domain_name: str, delta_gib: int) -> OperationReport:
        """Grow the system disk by ``delta_gib`` GiB."""
        if isinstance(delta_gib, bool) or not isinstance(delta_gib, int) or delta_gib <= 0:
            raise InvalidInputError("Size must be a positive whole number of GiB")

        report = OperationReport(operation="disk_resize", domain=domain_name)
        with log_operation(log, "disk_resize", vm_name=domain_name, delta_gib=delta_gib):
            path = self.system_disk(domain_name)
            with working("Resizing disk ...", self.console):
                result = self.image_tool.resize(path, delta_gib)
            report.add_output(result.output)
            report.add_step("resize", True, f"Disk {Path(path).name} grown by {delta_gib} GiB")
        return report

    def convert(self, domain_name: str, target_format: str) -> OperationReport:
        """
        Convert the system disk and point the saved XML at the new file.

        The XML update is best effort; a failure shows up as a warning on the
        report.
        """
        target_format = (target_format or "").strip().lower()
        if target_format not in DISK_FORMATS:
            raise InvalidInputError(
                f"Unknown format {target_format!r}, choose one of: {', '.join(DISK_FORMATS)}"
            )

        report = OperationReport(operation="disk_convert", domain=domain_name)
        with log_operation(log, "disk_convert", vm_name=domain_name, target_format=target_format) as oplog:
            source = self.system_disk(domain_name)
            destination = converted_disk_path(source, target_format)
            if destination == source:
                raise InvalidInputError(f"Disk {Path(source).name} already has the .{target_format} extension")

            with working("Converting disk ...", self.console):
                result = self.image_tool.convert(source, destination, target_format)
            report.add_output(result.output)
            report.add_step(
                "convert", True, f"Disk {Path(source).name} converted to {target_format} as {Path(destination).name}"
            )

            xml_file = xml_definition_path(self.xml_dir, domain_name)
            try:
                count = replace_disk_path_in_xml(xml_file, source, destination)
            except (OSError, UnicodeError, LookupError) as e:
                oplog.warning("disk_convert.xml_update_failed", xml_file=str(xml_file), error=str(e))
                report.add_step(
                    "update_xml",
                    False,
                    f"XML definition {xml_file} not updated: {e}",
                    policy=StepPolicy.BEST_EFFORT,
                    error=e,
                )
            else:
                if count:
                    report.add_step("update_xml", True, f"XML definition {xml_file} updated", StepPolicy.BEST_EFFORT)
                else:
                    report.add_step(
                        "update_xml",
                        False,
                        f"XML definition {xml_file} does not reference {source}",
                        policy=StepPolicy.BEST_EFFORT,
                    )
        return report

    def repair(self, domain_name: str) -> OperationReport:
        """Check the system disk and amend it only if the check fails."""
        report = OperationReport(operation="disk_repair", domain=domain_name)
        with log_operation(log, "disk_repair", vm_name=domain_name) as oplog:
            path = self.system_disk(domain_name)
            check = self.image_tool.check(path)
            report.add_output(check.output)
            if check.success:
                report.add_step("check", True, f"Disk {Path(path).name} is intact, nothing to repair")
                return report

            oplog.warning("disk_repair.inconsistent", path=path, returncode=check.returncode)
            report.add_step(
                "check", False, "Inconsistency detected, repairing", policy=StepPolicy.BEST_EFFORT
            )
            try:
                with working("Repairing disk ...", self.console):
                    repaired = self.image_tool.amend(path)
            except RepairError as e:
                e.check_output = check.output
                raise
            report.add_output(repaired.output)
            report.add_step("repair", True, f"Disk {Path(path).name} repaired")
        return report
