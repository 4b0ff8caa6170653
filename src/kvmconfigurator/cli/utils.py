#!/usr/bin/env python3
"""
Shared utilities for the KVM Configurator CLI.
"""

from typing import List, Optional

import questionary
from questionary import Style
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from kvmconfigurator import __version__
from kvmconfigurator.errors import PartialFailure, RepairError
from kvmconfigurator.models import DomainRecord, OperationReport, StatusKind

custom_style = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "bold"),
        ("answer", "fg:green"),
        ("pointer", "fg:cyan bold"),
        ("highlighted", "fg:cyan bold"),
        ("selected", "fg:green"),
        ("separator", "fg:gray"),
        ("instruction", "fg:gray italic"),
    ]
)

console = Console()

STATUS_STYLES = {
    StatusKind.RUNNING: "green",
    StatusKind.SHUT_OFF: "red",
    StatusKind.UNKNOWN: "yellow",
}


def print_banner():
    """Print the program banner."""
    console.print("\n[bold cyan]=== KVM-TOOLS ===[/]")
    console.print(f"  Version {__version__}\n", style="dim")


def status_markup(record: DomainRecord) -> str:
    style = STATUS_STYLES[record.status.kind]
    return f"[{style}]{escape(str(record.status))}[/{style}]"


def domain_table(records: List[DomainRecord], title: str = "Available Virtual Machines") -> Table:
    table = Table(title=title)
    table.add_column("No.", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("State")
    for index, record in enumerate(records, start=1):
        table.add_row(str(index), escape(record.name), status_markup(record))
    return table


def print_report(report: OperationReport, out: Optional[Console] = None) -> None:
    """Render successes in green, soft failures in yellow, tool output dimmed."""
    out = out or console
    for step in report.steps:
        if not step.message:
            continue
        if step.ok:
            out.print(f"[green]✅ {escape(step.message)}[/]")
        else:
            out.print(f"[yellow]⚠️  {escape(step.message)}[/]")
    for text in report.outputs:
        out.print(text, style="dim", markup=False, highlight=False)


def print_error(error: Exception, out: Optional[Console] = None) -> None:
    out = out or console
    if isinstance(error, PartialFailure) and error.report is not None:
        print_report(error.report, out)
    if isinstance(error, RepairError) and error.check_output.strip():
        out.print(error.check_output.strip(), style="dim", markup=False, highlight=False)
    out.print(f"[red]❌ {escape(str(error))}[/]", highlight=False)


def ask_new_name(old_name: str) -> Optional[str]:
    """Prompt for a domain's new name."""
    return questionary.text(f"New name for VM {old_name!r}:", style=custom_style).ask()


def confirm(question: str) -> bool:
    """Yes/no prompt, defaulting to no."""
    return bool(questionary.confirm(question, default=False, style=custom_style).ask())
