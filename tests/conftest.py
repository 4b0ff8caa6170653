"""
Pytest fixtures and configuration for KVM Configurator tests.
"""
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from kvmconfigurator.backends.qemu_disk import QemuImgTool
from kvmconfigurator.backends.virsh import VirshBackend
from kvmconfigurator.interfaces.process import ProcessResult, ProcessRunner


DOMAIN_LIST = """\
 Id   Name        State
----------------------------
 1    web-01      running
 -    db-01       shut off
"""


def domblklist(*rows: Tuple[str, str, str, str]) -> str:
    """Build ``virsh domblklist --details`` output."""
    lines = [" Type   Device   Target   Source", "------------------------------------------------"]
    for row in rows:
        lines.append(" " + "   ".join(row))
    return "\n".join(lines) + "\n"


def domain_xml(*disks: Tuple[str, str]) -> str:
    """Minimal libvirt domain XML with (device, source file) disks."""
    parts = ["<domain type='kvm'>", "  <name>vm</name>", "  <devices>"]
    for device, source in disks:
        parts.append(f"    <disk type='file' device='{device}'>")
        parts.append("      <driver name='qemu' type='qcow2'/>")
        parts.append(f"      <source file='{source}'/>")
        parts.append("      <target dev='vda' bus='virtio'/>")
        parts.append("    </disk>")
    parts += ["  </devices>", "</domain>"]
    return "\n".join(parts) + "\n"


class FakeRunner(ProcessRunner):
    """
    Scripted process runner.

    Responses are registered per command prefix; the longest matching prefix
    wins. Unscripted commands succeed with empty output. Every call is kept
    in ``calls``.
    """

    def __init__(self):
        self.responses: Dict[Tuple[str, ...], ProcessResult] = {}
        self.calls: List[List[str]] = []

    def script(self, prefix: List[str], returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.responses[tuple(prefix)] = ProcessResult(returncode=returncode, stdout=stdout, stderr=stderr)

    def run(self, command, capture_output=True, cwd=None, env=None) -> ProcessResult:
        self.calls.append(list(command))
        best: Optional[Tuple[str, ...]] = None
        for prefix in self.responses:
            if tuple(command[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        if best is None:
            return ProcessResult(returncode=0)
        return self.responses[best]

    def called(self, *prefix: str) -> bool:
        return any(tuple(call[: len(prefix)]) == prefix for call in self.calls)


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def hypervisor(runner):
    return VirshBackend(runner)


@pytest.fixture
def image_tool(runner):
    return QemuImgTool(runner)


@pytest.fixture
def xml_dir(tmp_path) -> Path:
    path = tmp_path / "xml"
    path.mkdir()
    return path


@pytest.fixture
def disk_dir(tmp_path) -> Path:
    path = tmp_path / "images"
    path.mkdir()
    return path


def latin1_domain_xml(source: str, declared: bool = True) -> bytes:
    """Domain XML with a non-UTF-8 byte in the description."""
    declaration = b"<?xml version='1.0' encoding='ISO-8859-1'?>\n" if declared else b""
    return (
        declaration
        + b"<domain type='kvm'><name>vm</name><description>Caf\xe9</description><devices>"
        + b"<disk type='file' device='disk'><source file='"
        + source.encode("ascii")
        + b"'/></disk></devices></domain>\n"
    )
