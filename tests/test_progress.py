#!/usr/bin/env python3
"""The working indicator stops on every exit path."""

from contextlib import contextmanager
from unittest.mock import patch

import pytest
from rich.console import Console

from conftest import domblklist
from kvmconfigurator.diskops import DiskOperations
from kvmconfigurator.errors import ConvertError, RepairError, ResizeError
from kvmconfigurator.progress import working


class RecordingConsole:
    """Stands in for a rich Console; records spinner start and stop."""

    def __init__(self):
        self.events = []

    @contextmanager
    def status(self, message, spinner=None):
        self.events.append(("start", message))
        try:
            yield
        finally:
            self.events.append(("stop", message))


@pytest.fixture
def console():
    return RecordingConsole()


@pytest.fixture
def ops(runner, hypervisor, image_tool, xml_dir, console):
    runner.script(["virsh", "domblklist"], stdout=domblklist(("file", "disk", "vda", "/images/vm1.qcow2")))
    return DiskOperations(hypervisor, image_tool, xml_dir, console=console)


class TestWorking:
    def test_stops_after_block(self, console):
        with working("Resizing disk ...", console):
            assert [kind for kind, _ in console.events] == ["start"]
        assert [kind for kind, _ in console.events] == ["start", "stop"]

    def test_stops_when_block_raises(self, console):
        with pytest.raises(RuntimeError):
            with working("Converting disk ...", console):
                raise RuntimeError("boom")
        assert [kind for kind, _ in console.events] == ["start", "stop"]

    def test_default_console_status_is_exited(self):
        with patch.object(Console, "status") as status:
            status.return_value.__exit__.return_value = False
            with pytest.raises(ValueError):
                with working("Repairing disk ..."):
                    raise ValueError("boom")
        status.return_value.__enter__.assert_called_once()
        status.return_value.__exit__.assert_called_once()


class TestDiskOperationsStopIndicator:
    def test_resize_failure(self, ops, runner, console):
        runner.script(["qemu-img", "resize"], returncode=1, stderr="locked")
        with pytest.raises(ResizeError):
            ops.resize("vm1", 2)
        assert [kind for kind, _ in console.events] == ["start", "stop"]

    def test_convert_failure(self, ops, runner, console):
        runner.script(["qemu-img", "convert"], returncode=1, stderr="no space left")
        with pytest.raises(ConvertError):
            ops.convert("vm1", "raw")
        assert [kind for kind, _ in console.events] == ["start", "stop"]

    def test_repair_failure(self, ops, runner, console):
        runner.script(["qemu-img", "check"], returncode=2)
        runner.script(["qemu-img", "amend"], returncode=1)
        with pytest.raises(RepairError):
            ops.repair("vm1")
        assert [kind for kind, _ in console.events] == ["start", "stop"]

    def test_success(self, ops, console):
        ops.resize("vm1", 2)
        assert console.events == [("start", "[blue]Resizing disk ...[/]"), ("stop", "[blue]Resizing disk ...[/]")]
