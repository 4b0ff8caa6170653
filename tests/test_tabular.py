#!/usr/bin/env python3
"""Tests for the virsh table parser."""

from kvmconfigurator.tabular import BLOCK_LIST_HEADERS, parse_tabular_output


class TestParseTabularOutput:
    """Test parse_tabular_output."""

    def test_skips_header_separator_and_blank_lines(self):
        raw = " Id   Name   State\n---------------------\n\n 1    vm     running\n\n"
        assert parse_tabular_output(raw, min_fields=3) == [["1", "vm", "running"]]

    def test_drops_short_rows(self):
        raw = " 1 vm running\n garbage\n 2 two\n"
        assert parse_tabular_output(raw, min_fields=3) == [["1", "vm", "running"]]

    def test_accepts_bytes(self):
        raw = b" Id Name State\n 3 vm running\n"
        assert parse_tabular_output(raw, min_fields=3) == [["3", "vm", "running"]]

    def test_custom_headers(self):
        raw = " Type   Device   Target   Source\n------\n file   disk   vda   /a.qcow2\n"
        rows = parse_tabular_output(raw, min_fields=4, header_prefixes=BLOCK_LIST_HEADERS)
        assert rows == [["file", "disk", "vda", "/a.qcow2"]]

    def test_empty_input(self):
        assert parse_tabular_output("", min_fields=3) == []
