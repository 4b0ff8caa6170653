#!/usr/bin/env python3
"""
Disk locator.

A domain's disks are looked up in two places: the saved XML definition
(``<xml_dir>/<name>.xml``), which may be stale or missing, and the
hypervisor's live block device list. Index 0 of the result is the system disk.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Union

from kvmconfigurator.errors import ExternalToolError, NoDiskFoundError
from kvmconfigurator.interfaces.hypervisor import Hypervisor
from kvmconfigurator.logging import get_logger
from kvmconfigurator.paths import xml_definition_path
from kvmconfigurator.tabular import BLOCK_LIST_HEADERS, parse_tabular_output

log = get_logger(__name__)

PLACEHOLDER_SOURCE = "-"


def parse_disk_paths_xml(xml_text: Union[str, bytes]) -> List[str]:
    """Source files of every ``<disk device="disk">``, in document order."""
    root = ET.fromstring(xml_text)
    paths = []
    for disk in root.findall("./devices/disk"):
        if disk.get("device") != "disk":
            continue
        source = disk.find("source")
        if source is None:
            continue
        path = source.get("file")
        if path:
            paths.append(path)
    return paths


def disk_paths_from_xml(xml_path: Union[str, Path]) -> List[str]:
    """
    Read an XML definition file.

    The file is handed to the parser as bytes so its encoding declaration
    applies. Raises OSError, ParseError or ValueError.
    """
    return parse_disk_paths_xml(Path(xml_path).read_bytes())


def parse_block_device_list(raw: Union[str, bytes]) -> List[str]:
    """
    Parse ``virsh domblklist --details``.

    Columns are positional: kind at index 1, source from index 3 on. Only
    ``disk`` rows with a real source are kept.
    """
    paths = []
    for fields in parse_tabular_output(raw, min_fields=4, header_prefixes=BLOCK_LIST_HEADERS):
        if fields[1] != "disk":
            continue
        source = " ".join(fields[3:])
        if source and source != PLACEHOLDER_SOURCE:
            paths.append(source)
    return paths


def live_disk_paths(hypervisor: Hypervisor, domain_name: str) -> List[str]:
    """Disk paths from the hypervisor only; raises NoDiskFoundError if none."""
    try:
        paths = parse_block_device_list(hypervisor.block_devices_output(domain_name))
    except ExternalToolError as e:
        log.warning("disks.live_query_failed", vm_name=domain_name, error=str(e))
        raise NoDiskFoundError(domain_name) from e
    if not paths:
        raise NoDiskFoundError(domain_name)
    return paths


def resolve_disk_paths(hypervisor: Hypervisor, xml_dir: Union[str, Path], domain_name: str) -> List[str]:
    """
    Disk paths of a domain, XML definition first, live query second.

    The live query is only made when the XML yields nothing, so a domain that
    is no longer registered still resolves from its saved definition.
    """
    xml_path = xml_definition_path(xml_dir, domain_name)
    try:
        paths = disk_paths_from_xml(xml_path)
    except (OSError, ET.ParseError, ValueError) as e:
        log.debug("disks.xml_unavailable", vm_name=domain_name, xml_path=str(xml_path), error=str(e))
        paths = []

    if paths:
        log.debug("disks.resolved", vm_name=domain_name, source="xml", count=len(paths))
        return paths

    paths = live_disk_paths(hypervisor, domain_name)
    log.debug("disks.resolved", vm_name=domain_name, source="live", count=len(paths))
    return paths
