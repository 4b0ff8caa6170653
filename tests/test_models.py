#!/usr/bin/env python3
"""Tests for the shared data models."""

from kvmconfigurator.models import (
    RUNNING,
    SHUT_OFF,
    CanonicalStatus,
    DomainRecord,
    OperationReport,
    StatusKind,
    StepPolicy,
)


class TestCanonicalStatus:
    def test_str_of_known_states(self):
        assert str(RUNNING) == "running"
        assert str(SHUT_OFF) == "shut off"

    def test_unknown_keeps_raw_text(self):
        status = CanonicalStatus.unknown("paused")
        assert status.kind is StatusKind.UNKNOWN
        assert str(status) == "paused"
        assert not status.is_running
        assert not status.is_shut_off


class TestDomainRecord:
    def test_active_depends_on_id(self):
        assert DomainRecord("3", "web", RUNNING).is_active
        assert not DomainRecord("-", "db", SHUT_OFF).is_active

    def test_to_dict(self):
        assert DomainRecord("-", "db", SHUT_OFF).to_dict() == {"id": "-", "name": "db", "status": "shut off"}


class TestOperationReport:
    def test_best_effort_failure_is_warning_not_failure(self):
        report = OperationReport(operation="vm_rename", domain="vm1")
        report.add_step("rename_domain", True)
        report.add_step("rename_xml", False, "XML file not found", policy=StepPolicy.BEST_EFFORT)

        assert report.succeeded
        assert [w.step for w in report.warnings] == ["rename_xml"]

    def test_hard_stop_failure(self):
        report = OperationReport(operation="disk_resize", domain="vm1")
        report.add_step("resize", False)
        assert not report.succeeded
        assert report.warnings == []

    def test_step_lookup(self):
        report = OperationReport(operation="x", domain="vm1")
        report.add_step("a", True, "done")
        assert report.step("a").message == "done"
        assert report.step("missing") is None

    def test_blank_outputs_are_dropped(self):
        report = OperationReport(operation="x", domain="vm1")
        report.add_output("")
        report.add_output(None)
        report.add_output("  Image resized.\n")
        assert report.outputs == ["Image resized."]
