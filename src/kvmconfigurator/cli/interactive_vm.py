#!/usr/bin/env python3
"""
Interactive VM management: pick a domain, then one of its allowed actions.
"""

from typing import Optional

import questionary
from rich.markup import escape

from kvmconfigurator.actions import eligible_rules, run_action, select_action
from kvmconfigurator.app import Toolbox
from kvmconfigurator.cli.interactive_disks import interactive_disk_menu
from kvmconfigurator.cli.utils import (
    ask_new_name,
    confirm,
    console,
    custom_style,
    domain_table,
    print_error,
    print_report,
)
from kvmconfigurator.domains import list_domains, sort_domains
from kvmconfigurator.errors import KvmConfiguratorError
from kvmconfigurator.models import Action, DomainRecord

BACK = "back"


def pick_action(record: DomainRecord) -> Optional[Action]:
    """Offer only the actions the domain's state allows."""
    rules = eligible_rules(record.status)
    choice = questionary.select(
        f"Action for {record.name} ({record.status}):",
        choices=[questionary.Choice(f"[{rule.key}] {rule.label}", value=rule.key) for rule in rules]
        + [questionary.Choice("[q] Back to VM overview", value="q")],
        style=custom_style,
    ).ask()
    if choice in (None, "q"):
        return None
    return select_action((rule.action for rule in rules), choice)


def dispatch_action(toolbox: Toolbox, action: Action, record: DomainRecord) -> None:
    """Run ``action`` on ``record``, reporting errors instead of raising."""
    try:
        if action is Action.DISK_OPS:
            interactive_disk_menu(toolbox, record.name)
        elif action is Action.RENAME:
            print_report(toolbox.renamer.rename(record.name, ask_new_name))
        elif action is Action.UNDEFINE:
            print_report(toolbox.deleter.delete_with_disks(record.name, confirm))
        else:
            run_action(toolbox.hypervisor, action, record.name)
            console.print("[green]✅ Action successfully completed[/]")
    except KvmConfiguratorError as e:
        print_error(e)


def interactive_vm_menu(toolbox: Toolbox) -> None:
    """List domains, select one and act on it until the operator backs out."""
    while True:
        try:
            records = sort_domains(list_domains(toolbox.hypervisor))
        except KvmConfiguratorError as e:
            console.print(f"[red]❌ Error reading the VM list: {escape(str(e))}[/]")
            return

        if not records:
            console.print("[dim]No VMs found[/]")
            return

        console.print(domain_table(records))
        selected = questionary.select(
            "Select VM:",
            choices=[questionary.Choice(f"{r.name} ({r.status})", value=r) for r in records]
            + [questionary.Choice("Back", value=BACK)],
            style=custom_style,
        ).ask()
        if selected in (None, BACK):
            return

        action = pick_action(selected)
        if action is None:
            continue
        dispatch_action(toolbox, action, selected)


def interactive_list_running(toolbox: Toolbox) -> None:
    """Show running domains only."""
    try:
        records = sort_domains(list_domains(toolbox.hypervisor, all_domains=False))
    except KvmConfiguratorError as e:
        print_error(e)
        return
    if not records:
        console.print("[dim]No running VMs[/]")
        return
    console.print(domain_table(records, title="Running Virtual Machines"))
