#!/usr/bin/env python3
"""
Interactive disk operations submenu.
"""

import questionary
from rich.markup import escape

from kvmconfigurator.app import Toolbox
from kvmconfigurator.cli.utils import console, custom_style, print_error, print_report
from kvmconfigurator.errors import KvmConfiguratorError
from kvmconfigurator.models import DISK_FORMATS

FORMAT_HINTS = {
    "qcow2": "qcow2   (default, compressed)",
    "raw": "raw     (uncompressed, fast)",
    "vdi": "vdi     (VirtualBox compatible)",
}


def _positive_int(text: str) -> bool:
    try:
        return int(text.strip()) > 0
    except ValueError:
        return False


def interactive_disk_menu(toolbox: Toolbox, vm_name: str) -> None:
    """Resize, convert or repair the system disk of ``vm_name``."""
    console.print(f"\n[bold cyan]Disk operations for {escape(vm_name)}[/]\n")

    choice = questionary.select(
        "Select disk operation:",
        choices=[
            questionary.Choice("Resize  (change size)", value="resize"),
            questionary.Choice("Convert (change format)", value="convert"),
            questionary.Choice("Repair  (check image)", value="repair"),
            questionary.Choice("Back", value="back"),
        ],
        style=custom_style,
    ).ask()

    if choice in (None, "back"):
        return

    ops = toolbox.disk_operations
    try:
        if choice == "resize":
            size = questionary.text(
                "Grow by how many GiB:",
                validate=lambda x: _positive_int(x) or "Please enter a positive whole number",
                style=custom_style,
            ).ask()
            if size is None:
                return
            report = ops.resize(vm_name, int(size))
        elif choice == "convert":
            target = questionary.select(
                "Target format:",
                choices=[questionary.Choice(FORMAT_HINTS[fmt], value=fmt) for fmt in DISK_FORMATS],
                style=custom_style,
            ).ask()
            if target is None:
                return
            report = ops.convert(vm_name, target)
        else:
            report = ops.repair(vm_name)
    except KvmConfiguratorError as e:
        print_error(e)
        return

    print_report(report)
