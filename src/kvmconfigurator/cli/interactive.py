#!/usr/bin/env python3
"""
Interactive mode for the KVM Configurator CLI.
"""

import questionary

from kvmconfigurator.app import Toolbox
from kvmconfigurator.cli.interactive_vm import interactive_list_running, interactive_vm_menu
from kvmconfigurator.cli.utils import console, custom_style, print_banner, print_error
from kvmconfigurator.errors import KvmConfiguratorError


def interactive_mode(toolbox: Toolbox):
    """Run interactive mode."""
    print_banner()

    while True:
        choice = questionary.select(
            "What would you like to do?",
            choices=[
                questionary.Choice("🖥️  Manage VMs", value="vms"),
                questionary.Choice("▶️  List running VMs", value="running"),
                questionary.Choice("ℹ️  Host information", value="nodeinfo"),
                questionary.Choice("❌ Exit", value="exit"),
            ],
            style=custom_style,
        ).ask()

        if choice in (None, "exit"):
            console.print("[dim]Bye![/]")
            break

        handle_choice(toolbox, choice)


def handle_choice(toolbox: Toolbox, choice: str):
    """Handle interactive menu choice."""
    if choice == "vms":
        interactive_vm_menu(toolbox)
    elif choice == "running":
        interactive_list_running(toolbox)
    elif choice == "nodeinfo":
        try:
            toolbox.hypervisor.node_info()
        except KvmConfiguratorError as e:
            print_error(e)
