#!/usr/bin/env python3
"""Tests for CLI rendering helpers and prompt validators."""

import io

import pytest
from rich.console import Console

from kvmconfigurator.cli.interactive_disks import _positive_int
from kvmconfigurator.cli.utils import domain_table, print_error, print_report
from kvmconfigurator.errors import KvmConfiguratorError, PartialFailure
from kvmconfigurator.models import SHUT_OFF, CanonicalStatus, DomainRecord, OperationReport, StepPolicy


@pytest.fixture
def out():
    return Console(file=io.StringIO(), width=200, color_system=None)


def rendered(console: Console) -> str:
    return console.file.getvalue()


class TestOperatorTextIsNotMarkup:
    """Names, paths and tool output are printed literally."""

    def test_bracketed_paths_in_report(self, out):
        report = OperationReport(operation="vm_rename", domain="b")
        report.add_step(
            "rename_disk", True, "Disk file renamed: /img/[old]/a.qcow2 -> /img/[old]/b.qcow2", StepPolicy.BEST_EFFORT
        )
        report.add_step("rename_xml", False, "XML file not found: /xml/[lab].xml", policy=StepPolicy.BEST_EFFORT)

        print_report(report, out)

        text = rendered(out)
        assert "Disk file renamed: /img/[old]/a.qcow2 -> /img/[old]/b.qcow2" in text
        assert "XML file not found: /xml/[lab].xml" in text

    def test_closing_tag_in_error_text(self, out):
        print_error(KvmConfiguratorError("qemu-img failed: [/x] bad header"), out)
        assert "qemu-img failed: [/x] bad header" in rendered(out)

    def test_partial_failure_paths(self, out):
        report = OperationReport(operation="vm_undefine", domain="vm1")
        report.add_step("undefine", True, "VM [red]vm1 became undefined")
        print_error(PartialFailure("Some files could not be deleted", {"/img/[2].qcow2": "gone"}, report=report), out)

        text = rendered(out)
        assert "VM [red]vm1 became undefined" in text
        assert "/img/[2].qcow2 (gone)" in text

    def test_domain_table(self, out):
        records = [
            DomainRecord("-", "[lab] web", SHUT_OFF),
            DomainRecord("-", "db", CanonicalStatus.unknown("[paused]")),
        ]
        out.print(domain_table(records))

        text = rendered(out)
        assert "[lab] web" in text
        assert "[paused]" in text


class TestPositiveInt:
    """Validator of the resize prompt."""

    @pytest.mark.parametrize("text", ["1", " 20 ", "+5"])
    def test_accepted(self, text):
        assert _positive_int(text)

    @pytest.mark.parametrize("text", ["", "0", "-3", "2.5", "abc", "²", "5²"])
    def test_rejected(self, text):
        assert not _positive_int(text)
